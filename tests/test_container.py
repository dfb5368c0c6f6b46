"""Tests for container wiring."""

from avo_nutrition.config import Settings
from avo_nutrition.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.nutrition_service is not None
    assert container.announcement_service.max_links == 10


def test_build_container_passes_announcement_settings() -> None:
    container = build_container(
        Settings(
            announcement_max_links=3,
            announcement_preview_length=40,
            announcement_allow_http=True,
            debug=True,
        )
    )
    service = container.announcement_service
    assert service.max_links == 3
    assert service.preview_length == 40
    assert service.allow_http is True
    assert container.nutrition_service.debug is True


def test_asgi_app_has_container() -> None:
    from avo_nutrition.api.asgi import app

    assert app.state.container.announcement_service is not None

"""Tests for settings loading."""

from avo_nutrition.config import Settings


def test_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("ANNOUNCEMENT_MAX_LINKS", raising=False)
    settings = Settings(_env_file=None)
    assert settings.announcement_max_links == 10
    assert settings.announcement_preview_length == 120
    assert settings.announcement_allow_http is False


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("ANNOUNCEMENT_MAX_LINKS", "4")
    monkeypatch.setenv("ANNOUNCEMENT_ALLOW_HTTP", "true")
    settings = Settings(_env_file=None)
    assert settings.announcement_max_links == 4
    assert settings.announcement_allow_http is True

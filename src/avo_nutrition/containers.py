"""Dependency container wiring for the application."""

from dataclasses import dataclass

from avo_nutrition.config import Settings
from avo_nutrition.services.announcements import AnnouncementService
from avo_nutrition.services.nutrition import NutritionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_service: NutritionService
    announcement_service: AnnouncementService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    nutrition_service = NutritionService(debug=resolved_settings.debug)
    announcement_service = AnnouncementService(
        max_links=resolved_settings.announcement_max_links,
        preview_length=resolved_settings.announcement_preview_length,
        allow_http=resolved_settings.announcement_allow_http,
        debug=resolved_settings.debug,
    )
    return AppContainer(
        settings=resolved_settings,
        nutrition_service=nutrition_service,
        announcement_service=announcement_service,
    )

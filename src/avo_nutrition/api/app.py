"""FastAPI application factory."""

from fastapi import FastAPI

from avo_nutrition.api.announcements import router as announcements_router
from avo_nutrition.api.nutrition import router as nutrition_router
from avo_nutrition.app_logging import configure_logging
from avo_nutrition.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)

    app = FastAPI()
    app.state.container = container

    app.include_router(nutrition_router)
    app.include_router(announcements_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app

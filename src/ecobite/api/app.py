"""FastAPI application factory."""

from fastapi import FastAPI

from ecobite.api.catalog import (
    calculator_router,
    ingredients_router,
    recommendations_router,
)
from ecobite.api.errors import register_exception_handlers
from ecobite.api.meals import router as meals_router
from ecobite.api.tracker import insights_router, tracker_router
from ecobite.app_logging import configure_logging
from ecobite.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)

    app = FastAPI(title="EcoBite API")
    app.state.container = container

    register_exception_handlers(app)
    app.include_router(ingredients_router)
    app.include_router(calculator_router)
    app.include_router(recommendations_router)
    app.include_router(meals_router)
    app.include_router(tracker_router)
    app.include_router(insights_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok", "message": "EcoBite API is running"}

    return app

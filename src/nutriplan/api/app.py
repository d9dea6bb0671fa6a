"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from nutriplan.api.admin import router as admin_router
from nutriplan.api.allergens import router as allergens_router
from nutriplan.api.cases import router as cases_router
from nutriplan.api.choices import router as choices_router
from nutriplan.api.knowledge import router as knowledge_router
from nutriplan.app_logging import configure_logging
from nutriplan.containers import AppContainer
from nutriplan.errors import NutriplanError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        scheduler = app.state.container.scheduler
        enabled = app.state.container.settings.auto_assignment_enabled
        if enabled:
            scheduler.start()
        yield
        if enabled:
            await scheduler.stop()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(knowledge_router)
    app.include_router(allergens_router)
    app.include_router(cases_router)
    app.include_router(choices_router)
    app.include_router(admin_router)

    @app.exception_handler(NutriplanError)
    async def handle_nutriplan_error(
        request: Request, exc: NutriplanError
    ) -> JSONResponse:
        if exc.http_status >= 500:
            logger.error("Request to %s failed: %s", request.url.path, exc)
        return JSONResponse(
            status_code=exc.http_status,
            content={"success": False, "error": exc.to_dict()},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app

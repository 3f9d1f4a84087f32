"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from kitchen_wiz.api.assistant import router as assistant_router
from kitchen_wiz.api.pantry import router as pantry_router
from kitchen_wiz.api.planner import router as planner_router
from kitchen_wiz.api.recipes import router as recipes_router
from kitchen_wiz.app_logging import configure_logging
from kitchen_wiz.containers import AppContainer
from kitchen_wiz.errors import KitchenError
from kitchen_wiz.services.views import DashboardSummary, dashboard


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.notification_session.reset()
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(pantry_router)
    app.include_router(recipes_router)
    app.include_router(planner_router)
    app.include_router(assistant_router)

    @app.exception_handler(KitchenError)
    async def kitchen_error_handler(
        request: Request, exc: KitchenError
    ) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "details": exc.details},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/dashboard")
    async def overview(request: Request) -> DashboardSummary:
        """Return stock totals, expiring count and category distribution."""
        state_container: AppContainer = request.app.state.container
        return dashboard(state_container.pantry_service.inventory)

    @app.post("/alerts")
    async def alerts(request: Request) -> dict[str, object]:
        """Return the expiry alert if it has not been shown this session."""
        state_container: AppContainer = request.app.state.container
        alert = state_container.expiry_notifier.check(
            state_container.pantry_service.inventory,
            state_container.notification_session,
        )
        return {"alert": alert}

    @app.post("/alerts/session")
    async def new_session(request: Request) -> dict[str, str]:
        """Start a new notification session."""
        request.app.state.container.notification_session.reset()
        return {"status": "ok"}

    @app.get("/requests")
    async def request_states(request: Request) -> dict[str, object]:
        """Return the state of each AI operation."""
        state_container: AppContainer = request.app.state.container
        return {"requests": state_container.requests.snapshot()}

    return app

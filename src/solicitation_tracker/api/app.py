"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from solicitation_tracker.api.admin import router as admin_router
from solicitation_tracker.api.solicitations import router as solicitations_router
from solicitation_tracker.app_logging import configure_logging
from solicitation_tracker.containers import AppContainer
from solicitation_tracker.domain.errors import (
    DuplicateIdError,
    IllegalTransitionError,
    MissingRequiredFieldError,
    SolicitationNotFoundError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close application resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)
    app.include_router(solicitations_router)

    @app.exception_handler(MissingRequiredFieldError)
    async def missing_field_handler(
        request: Request, exc: MissingRequiredFieldError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "field": exc.field},
        )

    @app.exception_handler(SolicitationNotFoundError)
    async def not_found_handler(
        request: Request, exc: SolicitationNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc), "solicitation_id": exc.solicitation_id},
        )

    @app.exception_handler(DuplicateIdError)
    async def duplicate_id_handler(
        request: Request, exc: DuplicateIdError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc), "solicitation_id": exc.solicitation_id},
        )

    @app.exception_handler(IllegalTransitionError)
    async def illegal_transition_handler(
        request: Request, exc: IllegalTransitionError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "detail": str(exc),
                "current_status": exc.current_status.value,
                "target_status": exc.target_status.value,
                "role": exc.role.value,
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app

"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from routine_tracker.api.serializers import (
    calendar_payload,
    reminder_payload,
    summary_payload,
)
from routine_tracker.app_logging import configure_logging
from routine_tracker.containers import AppContainer
from routine_tracker.domain.routines import RangeKey

_HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
}


async def require_user_id(x_user_id: UUID | None = Header(default=None)) -> UUID:
    """Return the caller's user id resolved upstream."""
    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header is required.",
        )
    return x_user_id


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(StarletteHTTPException)
    async def http_error(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
        return _error_response(exc.status_code, code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "BAD_REQUEST",
            "Invalid request.",
            details=jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled request error", extra={"path": request.url.path})
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            "Failed to process request.",
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/v1/dashboard")
    async def dashboard(
        request: Request,
        range_key: RangeKey = Query(default="7d", alias="range"),
        user_id: UUID = Depends(require_user_id),
    ) -> dict[str, object]:
        """Return the dashboard summary for the caller."""
        state_container: AppContainer = request.app.state.container
        summary = state_container.dashboard_service.get_summary(user_id, range_key)
        return {"data": summary_payload(summary)}

    @app.get("/v1/calendar")
    async def calendar(
        request: Request,
        range_key: RangeKey = Query(default="30d", alias="range"),
        user_id: UUID = Depends(require_user_id),
    ) -> dict[str, object]:
        """Return calendar cells for every day of the range."""
        state_container: AppContainer = request.app.state.container
        cells = state_container.dashboard_service.get_calendar(user_id, range_key)
        return {"data": {"cells": [calendar_payload(cell) for cell in cells]}}

    @app.get("/v1/reminders/evaluate")
    async def evaluate_reminder(
        request: Request,
        day: date | None = Query(default=None, alias="date"),
        user_id: UUID = Depends(require_user_id),
    ) -> dict[str, object]:
        """Report whether the caller has logged nothing on a day."""
        state_container: AppContainer = request.app.state.container
        evaluation = state_container.dashboard_service.evaluate_reminder(user_id, day)
        return {"data": reminder_payload(evaluation)}

    return app


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details: object | None = None,
) -> JSONResponse:
    error: dict[str, object] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})

"""FastAPI boundary for guard errors.

Services let guard violations propagate out of their endpoints and register
these handlers once::

    app = FastAPI()
    install_handlers(app)
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from throwif.errors import (
    ArgumentError,
    ArgumentOutOfRangeError,
    GuardError,
)
from throwif.logging import get_logger
from throwif.models import ErrorResponse

_logger = get_logger(__name__)


def _details_for(exc: GuardError) -> dict[str, object] | None:
    if not isinstance(exc, ArgumentError):
        return None
    details: dict[str, object] = {"param_name": exc.param_name}
    if isinstance(exc, ArgumentOutOfRangeError):
        details["actual_value"] = repr(exc.actual_value)
    return details


def _status_for(exc: GuardError) -> int:
    # Data errors are the client's; anything else is a defect in the service.
    if isinstance(exc, ArgumentError):
        return 422
    return 500


async def guard_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, GuardError):
        raise exc
    code = exc.code
    status_code = _status_for(exc)
    _logger.warning(
        "guard rejected %s %s",
        request.method,
        request.url.path,
        extra={
            "param_name": getattr(exc, "param_name", None),
            "error_code": code,
        },
    )
    payload = ErrorResponse(
        error=exc.message if status_code < 500 else "Internal server error",
        code=code,
        details=_details_for(exc),
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json"))


def install_handlers(app: FastAPI) -> None:
    """Route every :class:`GuardError` raised by an endpoint to the JSON handler."""
    app.add_exception_handler(GuardError, guard_exception_handler)

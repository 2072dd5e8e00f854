"""
Shared service error type and exception handler registration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import FastAPI, Request
    from fastapi.responses import JSONResponse
    from starlette.types import ExceptionHandler


class ServiceError(Exception):
    """
    Domain error rendered as the standard JSON error envelope.

    Attributes:
        error: Machine-readable error code (e.g. "UNAUTHORIZED")
        message: Human-readable description
        status_code: HTTP status to respond with
        details: Extra structured context, usually empty
    """

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details: dict[str, Any] = details if details is not None else {}

    def to_dict(self) -> dict[str, Any]:
        """Return the error envelope body."""
        return {"error": self.error, "message": self.message, "details": self.details}


def register_exception_handlers(
    app: FastAPI,
    error_type: type[ServiceError],
    service_error_handler: Callable[[Request, Any], Awaitable[JSONResponse]],
    unhandled_exception_handler: Callable[[Request, Exception], Awaitable[JSONResponse]],
) -> None:
    """Attach the service error handler and the catch-all 500 handler to app."""
    app.add_exception_handler(error_type, cast("ExceptionHandler", service_error_handler))
    app.add_exception_handler(Exception, cast("ExceptionHandler", unhandled_exception_handler))

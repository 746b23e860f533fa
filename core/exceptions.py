import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ContactError(Exception):
    """Base error rendered to the client as ``{"ok": false, "error": message}``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ContactValidationError(ContactError):
    """A submitted field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class ContactConfigurationError(ContactError):
    """The server is missing configuration it needs to relay mail."""


class ContactDeliveryError(ContactError):
    """The relay rejected the message or could not be reached."""


class MailConfigurationError(Exception):
    """Raised while building a mail transport from incomplete settings."""


def error_body(message: str) -> dict:
    return {"ok": False, "error": message}


async def contact_error_handler(request: Request, exc: ContactError):
    if isinstance(exc, ContactValidationError):
        logger.info("Rejected submission from %s: %s", request.client.host if request.client else "unknown", exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install error rendering; call before adding CORS and header middleware.

    The catch-all middleware sits inside them, so fallback 500s still carry
    CORS and security headers. The ``Exception`` handler only covers errors
    raised by the outer middleware themselves.
    """
    app.add_exception_handler(ContactError, contact_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return await unhandled_error_handler(request, exc)

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import contact, general_api
from core.config import Settings, settings as default_settings
from core.exceptions import register_exception_handlers
from core.logging_config import configure_logging
from core.mail import MailTransport
from core.rate_limit import ContactRateLimiter
from core.security_headers import add_security_headers
from core.state import AppState

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state: AppState = app.state.contact
    logger.info("🚀 %s contact backend starting up...", state.settings.SITE_NAME)
    if not state.settings.CONTACT_TO_EMAIL:
        logger.warning("⚠️ CONTACT_TO_EMAIL is not set; submissions will be rejected")
    yield
    logger.info("🛑 Contact backend shutting down...")


def create_app(
    settings: Optional[Settings] = None,
    rate_limiter: Optional[ContactRateLimiter] = None,
    transport_factory: Optional[Callable[[Settings], MailTransport]] = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(lifespan=lifespan, title="Contact Relay Backend")
    app.state.contact = AppState(
        settings=settings,
        rate_limiter=rate_limiter or ContactRateLimiter(
            max_requests=settings.RATE_LIMIT_MAX,
            window_minutes=settings.RATE_LIMIT_WINDOW_MINUTES,
            storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        ),
        transport_factory=transport_factory or MailTransport,
    )

    # innermost first: error rendering must run inside CORS
    register_exception_handlers(app)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_origin_regex=settings.CORS_ORIGIN_REGEX,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    add_security_headers(app)

    # Routers
    app.include_router(general_api.router)
    app.include_router(contact.router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)

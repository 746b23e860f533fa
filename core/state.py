from dataclasses import dataclass
from typing import Callable

from fastapi import Request

from core.config import Settings
from core.mail import MailTransport
from core.rate_limit import ContactRateLimiter


@dataclass
class AppState:
    """Everything a request handler needs, installed on ``app.state.contact``."""

    settings: Settings
    rate_limiter: ContactRateLimiter
    # called once per submission so each send sees the current settings
    transport_factory: Callable[[Settings], MailTransport] = MailTransport


def get_app_state(request: Request) -> AppState:
    return request.app.state.contact

"""
Shared fixtures: every test gets its own app built through ``create_app`` with
isolated settings, a fresh rate-limit table and a fake mail transport that
records what would have been relayed.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.mail import SendResult
from core.rate_limit import ContactRateLimiter
from main import create_app


class RecordingTransport:
    """Stands in for MailTransport; collects sends instead of talking SMTP."""

    def __init__(self, settings, outbox, fail_with=None):
        self.settings = settings
        self.outbox = outbox
        self.fail_with = fail_with

    async def send(self, subject, text, html, reply_to):
        self.outbox.append({"subject": subject, "text": text, "html": html, "reply_to": reply_to})
        if self.fail_with is not None:
            return SendResult(ok=False, error=self.fail_with)
        return SendResult(ok=True)


@pytest.fixture
def make_settings():
    def _make(**overrides):
        values = {
            "CONTACT_TO_EMAIL": "owner@example.com",
            "CONTACT_FROM_EMAIL": "Case Closed <no-reply@example.com>",
            "SMTP_HOST": "smtp.example.com",
            "SMTP_USER": "relay@example.com",
            "SMTP_PASS": "secret",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def outbox():
    return []


@pytest.fixture
def transport_failure():
    """Set ``.error`` to make the fake relay reject every send."""

    class _Failure:
        error = None

    return _Failure()


@pytest.fixture
def make_client(make_settings, outbox, transport_failure):
    def _make(raise_server_exceptions=True, **overrides):
        settings = make_settings(**overrides)

        def factory(current_settings):
            return RecordingTransport(current_settings, outbox, fail_with=transport_failure.error)

        app = create_app(
            settings=settings,
            rate_limiter=ContactRateLimiter(
                max_requests=settings.RATE_LIMIT_MAX,
                window_minutes=settings.RATE_LIMIT_WINDOW_MINUTES,
            ),
            transport_factory=factory,
        )
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _make


@pytest.fixture
def client(make_client):
    with make_client() as c:
        yield c


@pytest.fixture
def valid_payload():
    return {
        "name": "Jo",
        "email": "jo@example.com",
        "message": "Hello, this is long enough.",
    }

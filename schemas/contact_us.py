from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from services.sanitizer import sanitize


class ContactSubmission(BaseModel):
    name: str = Field("", description="Sender's name, sanitized")
    email: str = Field("", description="Sender's address, used as Reply-To")
    message: str = Field("", description="Free-text message, sanitized")

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> str:
        return sanitize(value)

    @classmethod
    def from_payload(cls, payload: Any) -> "ContactSubmission":
        """Build a submission from a decoded request body of any shape."""
        if not isinstance(payload, dict):
            payload = {}
        return cls(
            name=payload.get("name"),
            email=payload.get("email"),
            message=payload.get("message"),
        )


class SubmissionMetadata(BaseModel):
    sent_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    client_ip: str = "unknown"
    user_agent: Optional[str] = None


class ContactResponse(BaseModel):
    ok: bool
    error: Optional[str] = None

import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from slowapi.util import get_remote_address
from starlette.formparsers import FormParser

from core.exceptions import ContactConfigurationError, ContactDeliveryError, MailConfigurationError
from core.rate_limit import TOO_MANY_REQUESTS
from core.state import AppState, get_app_state
from schemas.contact_us import ContactResponse, ContactSubmission, SubmissionMetadata
from services.formatter import build_contact_email
from services.validator import validate_submission

logger = logging.getLogger(__name__)

router = APIRouter()

DELIVERY_FAILED = "Failed to send message."


def enforce_contact_rate_limit(
    request: Request,
    response: Response,
    state: AppState = Depends(get_app_state),
):
    result = state.rate_limiter.hit(get_remote_address(request))
    if not result.allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=TOO_MANY_REQUESTS,
            headers=result.headers,
        )
    response.headers.update(result.headers)


BODY_TOO_LARGE = "Request body too large."


async def read_limited_body(request: Request, max_bytes: int) -> bytes:
    """Read at most ``max_bytes``; larger bodies get a 413 before they are buffered."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=BODY_TOO_LARGE)

    body = bytearray()
    async for chunk in request.stream():
        body += chunk
        if len(body) > max_bytes:
            raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=BODY_TOO_LARGE)
    return bytes(body)


async def _replay(body: bytes):
    yield body
    # an empty chunk tells FormParser the stream is finished
    yield b""


async def read_payload(request: Request, max_bytes: int) -> dict:
    """Decode a JSON or urlencoded body; anything else reads as empty."""
    body = await read_limited_body(request, max_bytes)

    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json":
        if not body.strip():
            return {}
        try:
            payload = json.loads(body)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid request body.")
        return payload if isinstance(payload, dict) else {}
    if content_type == "application/x-www-form-urlencoded":
        form = await FormParser(request.headers, _replay(body)).parse()
        return dict(form)
    return {}


@router.post(
    "/api/contact",
    response_model=ContactResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(enforce_contact_rate_limit)],
)
async def submit_contact(request: Request, state: AppState = Depends(get_app_state)):
    settings = state.settings
    payload = await read_payload(request, settings.MAX_BODY_BYTES)

    submission = ContactSubmission.from_payload(payload)
    validate_submission(submission)

    if not settings.CONTACT_TO_EMAIL:
        logger.error("CONTACT_TO_EMAIL is not set; cannot relay contact submissions")
        raise ContactConfigurationError("Server not configured: CONTACT_TO_EMAIL missing.")

    metadata = SubmissionMetadata(
        client_ip=get_remote_address(request),
        user_agent=request.headers.get("user-agent"),
    )
    email = build_contact_email(submission, metadata, settings.SITE_NAME)

    try:
        transport = state.transport_factory(settings)
    except MailConfigurationError as e:
        logger.error("❌ Mail transport misconfigured: %s", e)
        raise ContactDeliveryError(DELIVERY_FAILED)

    result = await transport.send(email.subject, email.text, email.html, email.reply_to)
    if not result.ok:
        logger.error("❌ Failed to relay contact email from %s: %s", email.reply_to, result.error, exc_info=result.error)
        raise ContactDeliveryError(DELIVERY_FAILED)

    return ContactResponse(ok=True)

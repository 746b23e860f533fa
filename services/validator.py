from pydantic import EmailStr, TypeAdapter, ValidationError

from core.exceptions import ContactValidationError
from schemas.contact_us import ContactSubmission
from services.sanitizer import is_email

MIN_NAME_LENGTH = 2
MIN_MESSAGE_LENGTH = 10

NAME_ERROR = "Please enter your name."
EMAIL_ERROR = "Please enter a valid email."
MESSAGE_ERROR = "Please enter a longer message."

# same check fastapi-mail applies to the Reply-To address
_email_address = TypeAdapter(EmailStr)


def is_deliverable_address(value: str) -> bool:
    try:
        _email_address.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_submission(submission: ContactSubmission) -> None:
    """Raise ContactValidationError for the first field that fails its check."""
    if not submission.name or len(submission.name) < MIN_NAME_LENGTH:
        raise ContactValidationError(NAME_ERROR)
    if not submission.email or not is_email(submission.email) or not is_deliverable_address(submission.email):
        raise ContactValidationError(EMAIL_ERROR)
    if not submission.message or len(submission.message) < MIN_MESSAGE_LENGTH:
        raise ContactValidationError(MESSAGE_ERROR)

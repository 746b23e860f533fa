import re
from typing import Any

MAX_FIELD_LENGTH = 4000

_LINE_BREAKS = re.compile(r"[\r\n]+")
_EMAIL_SHAPE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def sanitize(value: Any) -> str:
    """Flatten line breaks, trim and cap a free-text field.

    Keeps CR/LF out of anything that ends up near a mail header and bounds
    the size of the outbound message. Never raises; falsy values such as
    ``None``, ``False`` and ``0`` read as absent and become "".
    """
    if not value:
        return ""
    text = _LINE_BREAKS.sub(" ", str(value)).strip()
    # rstrip again so a cut landing on a space still sanitizes to itself
    return text[:MAX_FIELD_LENGTH].rstrip()


def is_email(value: Any) -> bool:
    return bool(_EMAIL_SHAPE.fullmatch(sanitize(value)))

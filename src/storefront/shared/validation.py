import re
from uuid import UUID

_EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


def is_valid_email(value: str | None) -> bool:
    return bool(value) and _EMAIL_PATTERN.match(value) is not None


def is_valid_identifier(value: str | None) -> bool:
    """True when ``value`` is a well-formed aggregate id (a UUID string)."""
    if not value:
        return False
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True

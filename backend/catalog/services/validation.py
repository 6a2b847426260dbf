import re
from datetime import datetime

from ..core.exceptions import InvalidExpirationError

EXPIRATION_FORMAT = "%d/%m/%Y"
# strptime alone accepts one-digit days and months
EXPIRATION_PATTERN = re.compile(r"[0-9]{2}/[0-9]{2}/[0-9]{4}")


def validate_expiration(value: str, now: datetime | None = None) -> datetime:
    """Parse a DD/MM/YYYY expiration date that must fall after ``now``."""
    if not isinstance(value, str) or not EXPIRATION_PATTERN.fullmatch(value):
        raise InvalidExpirationError("invalid expiration date format")
    try:
        expires = datetime.strptime(value, EXPIRATION_FORMAT)
    except ValueError as exc:
        raise InvalidExpirationError("invalid expiration date format") from exc

    if expires < (now or datetime.now()):
        raise InvalidExpirationError("expiration date must be after current date")
    return expires

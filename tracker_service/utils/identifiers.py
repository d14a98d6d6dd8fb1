import re
import uuid

IDENTIFIER_PATTERN = re.compile(r"^[0-9a-fA-F]{32}$")


def new_identifier() -> str:
    return uuid.uuid4().hex


def is_identifier(value: str) -> bool:
    """True when ``value`` has the shape of a record identifier."""
    return isinstance(value, str) and bool(IDENTIFIER_PATTERN.match(value))

"""
core/validators.py -- Reusable pydantic field validators for request schemas.

Each domain package (auth/, profiles/, posts/) declares its own input schemas
and builds them from these pieces so every "required" field reports a human
message ("Name is required") instead of pydantic's generic wording. pydantic
collects every failing field before raising, which is what lets the API
answer with all validation problems at once.
"""

from typing import Annotated, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BeforeValidator
from pydantic_core import PydanticCustomError


def required(message: str) -> AfterValidator:
    """Reject None and empty (post-strip) values with the given message."""

    def check(value):
        if value is None or value == "":
            raise PydanticCustomError("required", message)
        return value

    return AfterValidator(check)


def min_length(length: int, message: str) -> AfterValidator:
    def check(value: str) -> str:
        if len(value) < length:
            raise PydanticCustomError("too_short", message)
        return value

    return AfterValidator(check)


def max_bytes(limit: int, message: str) -> AfterValidator:
    """Cap the UTF-8 encoded size; bcrypt refuses input over 72 bytes."""

    def check(value: str) -> str:
        if len(value.encode("utf-8")) > limit:
            raise PydanticCustomError("too_long", message)
        return value

    return AfterValidator(check)


def email_address(message: str) -> AfterValidator:
    """Accept a syntactically valid email and return it lower-cased.

    Deliverability (DNS) is not checked -- registration must work offline.
    """

    def check(value: str) -> str:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("email", message) from None
        return value.lower()

    return AfterValidator(check)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Optional text that treats "" and whitespace the same as absent.
OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]

"""Parsers for values of JSON request bodies.

Every parser takes a non-null JSON value and returns the value to be stored, or raises
`ValueError` with a message describing the expected value.
"""

from __future__ import annotations

import datetime
import enum
import re
import uuid
from collections.abc import Callable
from typing import TypeVar

from werkzeug.security import generate_password_hash

E = TypeVar("E", bound=enum.Enum)

EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 8


def string(value: object) -> str:
    if not isinstance(value, str):
        raise ValueError("must be a string")
    return value.strip()


def text(value: object) -> str:
    result = string(value)
    if not result:
        raise ValueError("must not be empty")
    return result


def min_length(length: int) -> Callable[[object], str]:
    def parse(value: object) -> str:
        result = text(value)
        if len(result) < length:
            raise ValueError(f"must be at least {length} characters long")
        return result

    return parse


def email(value: object) -> str:
    result = text(value)
    if not EMAIL.match(result):
        raise ValueError("must be a valid e-mail address")
    return result.lower()


def password(value: object) -> str:
    if not isinstance(value, str):
        raise ValueError("must be a string")
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"must be at least {MIN_PASSWORD_LENGTH} characters long")
    return generate_password_hash(value)


def boolean(value: object) -> bool:
    if not isinstance(value, bool):
        raise ValueError("must be a boolean")
    return value


def integer(minimum: int | None = None, maximum: int | None = None) -> Callable[[object], int]:
    def parse(value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("must be an integer")
        if minimum is not None and value < minimum:
            raise ValueError(f"must be greater than or equal to {minimum}")
        if maximum is not None and value > maximum:
            raise ValueError(f"must be less than or equal to {maximum}")
        return value

    return parse


def number(
    minimum: float | None = None, maximum: float | None = None
) -> Callable[[object], float]:
    def parse(value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("must be a number")
        if minimum is not None and value < minimum:
            raise ValueError(f"must be greater than or equal to {minimum}")
        if maximum is not None and value > maximum:
            raise ValueError(f"must be less than or equal to {maximum}")
        return float(value)

    return parse


def choice(enum_class: type[E]) -> Callable[[object], E]:
    def parse(value: object) -> E:
        try:
            return enum_class(value)
        except ValueError:
            options = ", ".join(str(m.value) for m in enum_class)
            raise ValueError(f"must be one of {options}") from None

    return parse


def identifier(value: object) -> uuid.UUID:
    if not isinstance(value, str):
        raise ValueError("must be a UUID string")
    try:
        return uuid.UUID(value)
    except ValueError:
        raise ValueError("must be a valid UUID") from None


def string_list(value: object) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError("must be a list of strings")
    return [v.strip() for v in value if v.strip()]


def date(value: object) -> datetime.date:
    if not isinstance(value, str):
        raise ValueError("must be an ISO 8601 date")
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise ValueError("must be an ISO 8601 date") from None


def timestamp(value: object) -> datetime.datetime:
    if not isinstance(value, str):
        raise ValueError("must be an ISO 8601 timestamp")
    try:
        result = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValueError("must be an ISO 8601 timestamp") from None
    if result.tzinfo is None:
        result = result.replace(tzinfo=datetime.timezone.utc)
    return result


def identifiers(values: list[str]) -> list[uuid.UUID]:
    """Parse query parameters holding single or comma separated UUIDs."""
    return [identifier(v.strip()) for value in values for v in value.split(",") if v.strip()]

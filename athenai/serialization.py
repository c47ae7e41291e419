from __future__ import annotations

import enum
import uuid
from datetime import date
from decimal import Decimal
from functools import singledispatch

from athenai.tenant_models import User


@singledispatch
def to_dict(model: object, exclude: list[str] | None = None) -> dict[str, object]:
    return model_to_dict(model, exclude)


@to_dict.register
def _(model: User) -> dict[str, object]:
    return model_to_dict(model, exclude=["password_hash"])


def model_to_dict(model: object, exclude: list[str] | None = None) -> dict[str, object]:
    assert hasattr(model, "__table__")
    exclude = [] if exclude is None else exclude
    return {
        col.name: to_json_value(getattr(model, col.name))
        for col in model.__table__.columns
        if col.name not in exclude
    }


def to_json_value(value: object) -> object:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    return value

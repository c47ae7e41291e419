from __future__ import annotations

import uuid
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from flask import current_app, g, jsonify, request
from flask.typing import ResponseReturnValue
from sqlalchemy import select
from sqlalchemy.exc import NoResultFound

from athenai import database as db, log, tenancy
from athenai.errors import APIError, ErrorCode
from athenai.models import Gym

GYM_HEADER = "X-Gym-ID"


def success(
    data: object, message: str, status: HTTPStatus = HTTPStatus.OK
) -> ResponseReturnValue:
    return jsonify({"status": "success", "message": message, "data": data}), status


def created(id_: uuid.UUID, message: str) -> ResponseReturnValue:
    return success({"id": str(id_)}, message, HTTPStatus.CREATED)


def error(
    code: ErrorCode,
    message: str,
    cause: BaseException | None = None,
    status: int | None = None,
) -> ResponseReturnValue:
    data: dict[str, object] = {"code": code.value}
    if cause is not None and log.is_development(current_app.config["APP_ENV"]):
        data["error"] = str(cause)
    return (
        jsonify({"status": "error", "message": message, "data": data}),
        status or code.status,
    )


def json_body() -> dict[str, Any]:  # type: ignore[explicit-any]
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise APIError(ErrorCode.BAD_REQUEST, "request body must be a JSON object")
    return data


def json_expected(function: Callable) -> Callable:  # type: ignore[type-arg]
    @wraps(function)
    def decorated_function(*args: object, **kwargs: object) -> ResponseReturnValue:
        if not request.is_json:
            raise APIError(ErrorCode.UNSUPPORTED_MEDIA_TYPE, "expected JSON request body")
        return function(*args, **kwargs)

    return decorated_function


def gym_required(function: Callable) -> Callable:  # type: ignore[type-arg]
    """Select the tenant schema of the gym given in the `X-Gym-ID` header."""

    @wraps(function)
    def decorated_function(*args: object, **kwargs: object) -> ResponseReturnValue:
        header = request.headers.get(GYM_HEADER)

        if not header:
            raise APIError(ErrorCode.BAD_REQUEST, f"missing {GYM_HEADER} header")

        try:
            gym_id = uuid.UUID(header)
        except ValueError as e:
            raise APIError(ErrorCode.BAD_REQUEST, f"invalid {GYM_HEADER} header", e) from e

        try:
            gym = (
                db.session.execute(
                    select(Gym).where(Gym.id == gym_id).where(Gym.deleted_at.is_(None))
                )
                .scalars()
                .one()
            )
        except NoResultFound as e:
            raise APIError(ErrorCode.NOT_FOUND, "gym not found", e) from e

        if not gym.is_active:
            raise APIError(ErrorCode.FORBIDDEN, "gym is not active")

        g.tenant_schema = tenancy.schema_name_for(gym.id)

        return function(*args, **kwargs)

    return decorated_function

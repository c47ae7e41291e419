"""User accounts of a gym."""

from __future__ import annotations

from flask import Blueprint
from flask.typing import ResponseReturnValue

from athenai import validation, views
from athenai.crud import Field, Resource, commit
from athenai.errors import APIError, ErrorCode
from athenai.serialization import to_dict
from athenai.tenant_models import Motivation, Role, SpecialSituation, TrainingPhase, User

bp = Blueprint("users", __name__)

users = Resource(
    User,
    "user",
    [
        Field(
            "username",
            validation.min_length(validation.MIN_USERNAME_LENGTH),
            required=True,
        ),
        Field("email", validation.email, required=True),
        Field(
            "password",
            validation.password,
            required=True,
            update=False,
            attribute="password_hash",
        ),
        Field("role", validation.choice(Role), default=Role.MEMBER),
        Field("description", validation.string),
        Field("training_phase", validation.choice(TrainingPhase)),
        Field("motivation", validation.choice(Motivation)),
        Field("special_situation", validation.choice(SpecialSituation)),
        Field("is_active", validation.boolean, default=True, update=False),
    ],
    tenant=True,
    order_by=[User.username],
)


@bp.route("/users/username/<username>")
@views.gym_required
def read_user_by_username(username: str) -> ResponseReturnValue:
    user = users.find_one(User.username == username)
    return views.success(to_dict(user), "User retrieved successfully")


@bp.route("/users/email/<email>")
@views.gym_required
def read_user_by_email(email: str) -> ResponseReturnValue:
    user = users.find_one(User.email == email.lower())
    return views.success(to_dict(user), "User retrieved successfully")


@bp.route("/users/<id_>/password", methods=["PUT"])
@views.gym_required
@views.json_expected
def update_user_password(id_: str) -> ResponseReturnValue:
    data = views.json_body()
    user = users.get(id_)

    if data.get("password") is None:
        raise APIError(ErrorCode.BAD_REQUEST, "'password' is required")

    user.password_hash = users.parse(Field("password", validation.password), data["password"])
    users.touch(user)
    commit(users.session, users.noun)

    return views.success(None, "Password updated successfully")


@bp.route("/users/<id_>/verify", methods=["POST"])
@views.gym_required
def verify_user(id_: str) -> ResponseReturnValue:
    user = users.get(id_)

    if user.is_verified:
        raise APIError(ErrorCode.CONFLICT, "user is already verified")

    user.is_verified = True
    users.touch(user)
    commit(users.session, users.noun)

    return views.success(to_dict(user), "User verified successfully")


@bp.route("/users/<id_>/active", methods=["POST"])
@views.gym_required
@views.json_expected
def set_user_active(id_: str) -> ResponseReturnValue:
    data = views.json_body()
    user = users.get(id_)

    if data.get("active") is None:
        raise APIError(ErrorCode.BAD_REQUEST, "'active' is required")

    active = users.parse(Field("active", validation.boolean), data["active"])

    if user.is_active == active:
        state = "active" if active else "inactive"
        raise APIError(ErrorCode.CONFLICT, f"user is already {state}")

    user.is_active = active
    users.touch(user)
    commit(users.session, users.noun)

    return views.success(to_dict(user), "User status updated successfully")


users.register(bp, "/users", "users")

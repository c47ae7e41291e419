"""Gyms (tenants) and the lifecycle of their schemas."""

from __future__ import annotations

import structlog
from flask import Blueprint
from flask.typing import ResponseReturnValue
from sqlalchemy.exc import SQLAlchemyError

from athenai import database as db, tenancy, validation, views
from athenai.crud import Data, Field, Resource, commit
from athenai.errors import APIError, ErrorCode
from athenai.models import Gym
from athenai.serialization import to_dict

logger = structlog.get_logger(__name__)

bp = Blueprint("gyms", __name__)


class GymResource(Resource):
    def create(self, data: Data) -> Gym:
        gym = super().create(data)
        gym_id = gym.id
        schema = tenancy.schema_name_for(gym_id)

        try:
            tenancy.provision(db.get_engine(), schema)
        except (SQLAlchemyError, OSError) as e:
            logger.exception("provisioning of tenant schema failed", gym_id=str(gym_id))
            db.session.delete(gym)
            db.session.commit()
            tenancy.drop(db.get_engine(), schema)
            raise APIError(ErrorCode.INTERNAL_ERROR, "failed to provision gym", e) from e

        return gym

    def set_active(self, id_: object, active: bool) -> Gym:
        gym = self.get(id_)

        if gym.is_active == active:
            state = "active" if active else "inactive"
            raise APIError(ErrorCode.CONFLICT, f"gym is already {state}")

        gym.is_active = active
        self.touch(gym)
        commit(self.session, self.noun)

        logger.info("gym status changed", gym_id=str(gym.id), active=active)

        return gym


gyms = GymResource(
    Gym,
    "gym",
    [
        Field("name", validation.text, required=True),
        Field("domain", validation.text, required=True),
        Field("email", validation.email, required=True),
        Field("address", validation.text, required=True),
        Field("phone", validation.text, required=True),
        Field("is_active", validation.boolean, default=True, update=False),
    ],
    order_by=[Gym.name],
)


@bp.route("/gyms/domain/<domain>")
def read_gym_by_domain(domain: str) -> ResponseReturnValue:
    gym = gyms.find_one(Gym.domain == domain)
    return views.success(to_dict(gym), "Gym retrieved successfully")


@bp.route("/gyms/<id_>/activate", methods=["PUT"])
def activate_gym(id_: str) -> ResponseReturnValue:
    return views.success(to_dict(gyms.set_active(id_, True)), "Gym activated successfully")


@bp.route("/gyms/<id_>/deactivate", methods=["PUT"])
def deactivate_gym(id_: str) -> ResponseReturnValue:
    return views.success(to_dict(gyms.set_active(id_, False)), "Gym deactivated successfully")


gyms.register(bp, "/gyms", "gyms")

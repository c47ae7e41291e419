"""Generic CRUD operations and routes for a single table.

A `Resource` is configured with the model, the accepted fields and the validation of one entity.
It provides the operations create, get, list, update and delete and registers the corresponding
routes on a blueprint:

    POST          <rule>            create
    GET           <rule>            list (optional)
    GET           <rule>/<id>       read
    PUT, PATCH    <rule>/<id>       partial update
    DELETE        <rule>/<id>       delete (soft or hard)

Updates only change the fields present in the request body with a non-null value.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass
from typing import Any

import structlog
from flask import Blueprint
from flask.typing import ResponseReturnValue
from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.orm import Session

from athenai import database as db, views
from athenai.errors import APIError, ErrorCode, from_integrity_error
from athenai.models import utcnow
from athenai.serialization import to_dict

logger = structlog.get_logger(__name__)

Data = dict[str, Any]  # type: ignore[explicit-any]


@dataclass(frozen=True)
class Field:
    name: str
    parse: Callable[[Any], Any]  # type: ignore[explicit-any]
    required: bool = False
    default: object = None
    create: bool = True
    update: bool = True
    attribute: str | None = None

    @property
    def target(self) -> str:
        return self.attribute or self.name

    def initial(self) -> object:
        return self.default() if callable(self.default) else self.default


def parse_id(value: object) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def commit(session: Session, noun: str) -> None:
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        error = from_integrity_error(e, noun)
        logger.info("integrity error", resource=noun, code=error.code.value)
        raise error from e


class Resource:
    def __init__(  # noqa: PLR0913
        self,
        model: type,
        noun: str,
        fields: Sequence[Field],
        *,
        tenant: bool = False,
        soft_delete: bool = True,
        order_by: Sequence[ColumnElement[Any]] = (),  # type: ignore[explicit-any]
        check: Callable[[Any, Data], None] | None = None,  # type: ignore[explicit-any]
    ):
        self.model = model
        self.noun = noun
        self.fields = list(fields)
        self.tenant = tenant
        self.soft_delete = soft_delete
        self.order_by = list(order_by) or [model.created_at]  # type: ignore[attr-defined]
        self._check = check

    @property
    def title(self) -> str:
        return self.noun[0].upper() + self.noun[1:]

    @property
    def session(self) -> Session:
        return db.tenant_session if self.tenant else db.session

    def live_criteria(self) -> list[ColumnElement[bool]]:
        if self.soft_delete:
            return [self.model.deleted_at.is_(None)]  # type: ignore[attr-defined]
        return []

    def select(self) -> Select[Any]:  # type: ignore[explicit-any]
        return select(self.model).where(*self.live_criteria())

    def check(self, obj: object, data: Data) -> None:
        if self._check is not None:
            self._check(obj, data)

    def parse(self, field: Field, value: object) -> object:
        try:
            return field.parse(value)
        except ValueError as e:
            raise APIError(ErrorCode.BAD_REQUEST, f"'{field.name}' {e}", e) from e

    def not_found(self, cause: BaseException | None = None) -> APIError:
        return APIError(ErrorCode.NOT_FOUND, f"{self.noun} not found", cause)

    def get(self, id_: object) -> Any:  # type: ignore[explicit-any]
        parsed = parse_id(id_)
        if parsed is None:
            raise self.not_found()
        return self.find_one(self.model.id == parsed)  # type: ignore[attr-defined]

    def exists(self, id_: object) -> bool:
        try:
            self.get(id_)
        except APIError:
            return False
        return True

    def live_ids(self, ids: Collection[uuid.UUID]) -> set[uuid.UUID]:
        """Return the subset of the given IDs which refer to existing rows."""
        if not ids:
            return set()
        model_id = self.model.id  # type: ignore[attr-defined]
        statement = select(model_id).where(model_id.in_(ids), *self.live_criteria())
        return set(self.session.execute(statement).scalars())

    def find_one(self, *criteria: ColumnElement[bool]) -> Any:  # type: ignore[explicit-any]
        try:
            return self.session.execute(self.select().where(*criteria)).scalars().one()
        except NoResultFound as e:
            raise self.not_found(e) from e

    def list(self, *criteria: ColumnElement[bool]) -> list[Any]:  # type: ignore[explicit-any]
        return list(
            self.session.execute(self.select().where(*criteria).order_by(*self.order_by))
            .scalars()
            .all()
        )

    def create(self, data: Data) -> Any:  # type: ignore[explicit-any]
        values = {}

        for field in self.fields:
            value = data.get(field.name) if field.create else None
            if value is None:
                if field.required and field.create:
                    raise APIError(ErrorCode.BAD_REQUEST, f"'{field.name}' is required")
                value = field.initial()
                if value is None:
                    continue
            else:
                value = self.parse(field, value)
            values[field.target] = value

        obj = self.model(**values)
        self.check(obj, data)
        self.session.add(obj)
        commit(self.session, self.noun)

        logger.info("created", resource=self.noun, id=str(obj.id))

        return obj

    def update(self, id_: object, data: Data) -> Any:  # type: ignore[explicit-any]
        obj = self.get(id_)

        for field in self.fields:
            value = data.get(field.name)
            if field.update and value is not None:
                setattr(obj, field.target, self.parse(field, value))

        self.touch(obj)
        self.check(obj, data)
        commit(self.session, self.noun)

        return obj

    def delete(self, id_: object) -> None:
        obj = self.get(id_)
        deleted_id = str(obj.id)

        if self.soft_delete:
            obj.deleted_at = utcnow()
            self.touch(obj)
        else:
            self.session.delete(obj)

        commit(self.session, self.noun)

        logger.info("deleted", resource=self.noun, id=deleted_id, soft=self.soft_delete)

    @staticmethod
    def touch(obj: object) -> None:
        if hasattr(obj, "updated_at"):
            obj.updated_at = utcnow()

    def register(self, bp: Blueprint, rule: str, endpoint: str, listable: bool = True) -> None:
        self.add_route(bp, rule, f"{endpoint}_create", self.create_view, ["POST"], json=True)
        if listable:
            self.add_route(bp, rule, f"{endpoint}_list", self.list_view, ["GET"])
        self.add_route(bp, f"{rule}/<id_>", f"{endpoint}_read", self.read_view, ["GET"])
        self.add_route(
            bp, f"{rule}/<id_>", f"{endpoint}_update", self.update_view, ["PUT", "PATCH"], json=True
        )
        self.add_route(bp, f"{rule}/<id_>", f"{endpoint}_delete", self.delete_view, ["DELETE"])

    def add_route(  # noqa: PLR0913
        self,
        bp: Blueprint,
        rule: str,
        endpoint: str,
        view: Callable[..., ResponseReturnValue],
        methods: list[str],
        json: bool = False,
    ) -> None:
        if json:
            view = views.json_expected(view)
        if self.tenant:
            view = views.gym_required(view)
        bp.add_url_rule(rule, endpoint, view, methods=methods)

    def create_view(self) -> ResponseReturnValue:
        obj = self.create(views.json_body())
        return views.created(obj.id, f"{self.title} created successfully")

    def list_view(self) -> ResponseReturnValue:
        return views.success(
            [to_dict(obj) for obj in self.list()], f"{self.title} list retrieved successfully"
        )

    def read_view(self, id_: str) -> ResponseReturnValue:
        return views.success(to_dict(self.get(id_)), f"{self.title} retrieved successfully")

    def update_view(self, id_: str) -> ResponseReturnValue:
        obj = self.update(id_, views.json_body())
        return views.success(to_dict(obj), f"{self.title} updated successfully")

    def delete_view(self, id_: str) -> ResponseReturnValue:
        self.delete(id_)
        return views.success(None, f"{self.title} deleted successfully")

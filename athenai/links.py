"""Association rows between an exercise and another catalog entity.

Both ends of a link are validated before the link is stored. The target of a link may be looked
up in several tables (e.g. gym specific equipment first, then public equipment), it is valid if
it exists in any of them.

Deleting an entity leaves its link rows in place. Links whose owner or target has been deleted
are hidden from all reads.
"""

from __future__ import annotations

import uuid
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from typing import Any

from flask import Blueprint
from flask.typing import ResponseReturnValue
from sqlalchemy import ColumnElement, delete

from athenai import validation, views
from athenai.crud import Data, Field, Resource, commit, parse_id
from athenai.errors import APIError, ErrorCode
from athenai.serialization import to_dict


@dataclass(frozen=True)
class Reference:
    field: str
    route: str
    noun: str
    resources: Sequence[Resource]

    def exists(self, id_: object) -> bool:
        return any(resource.exists(id_) for resource in self.resources)

    def live_ids(self, ids: Collection[uuid.UUID]) -> set[uuid.UUID]:
        found: set[uuid.UUID] = set()
        for resource in self.resources:
            found |= resource.live_ids(set(ids) - found)
        return found


class LinkResource(Resource):
    def __init__(
        self,
        model: type,
        noun: str,
        owner: Reference,
        target: Reference,
        *,
        tenant: bool = False,
        removable: bool = False,
    ):
        super().__init__(
            model,
            noun,
            [
                Field(owner.field, validation.identifier, required=True, update=False),
                Field(target.field, validation.identifier, required=True, update=False),
            ],
            tenant=tenant,
            soft_delete=False,
        )
        self.owner = owner
        self.target = target
        self.removable = removable

    def check(self, obj: object, data: Data) -> None:
        for reference in [self.owner, self.target]:
            if not reference.exists(getattr(obj, reference.field)):
                raise APIError(ErrorCode.NOT_FOUND, f"{reference.noun} not found")

    def live_links(self, links: Sequence[Any]) -> list[Any]:  # type: ignore[explicit-any]
        owner_ids = self.owner.live_ids({getattr(link, self.owner.field) for link in links})
        target_ids = self.target.live_ids({getattr(link, self.target.field) for link in links})
        return [
            link
            for link in links
            if getattr(link, self.owner.field) in owner_ids
            and getattr(link, self.target.field) in target_ids
        ]

    def target_ids(self, links: Sequence[Any]) -> list[str]:  # type: ignore[explicit-any]
        return sorted(str(getattr(link, self.target.field)) for link in self.live_links(links))

    def find_one(self, *criteria: ColumnElement[bool]) -> Any:  # type: ignore[explicit-any]
        link = super().find_one(*criteria)
        if not self.live_links([link]):
            raise self.not_found()
        return link

    def list(self, *criteria: ColumnElement[bool]) -> list[Any]:  # type: ignore[explicit-any]
        return self.live_links(super().list(*criteria))

    def links_of(self, reference: Reference, id_: object) -> list[object]:
        parsed = parse_id(id_)
        if parsed is None:
            raise APIError(ErrorCode.NOT_FOUND, f"{reference.noun} not found")
        return self.list(getattr(self.model, reference.field) == parsed)

    def remove_all(self, id_: object) -> int:
        parsed = parse_id(id_)
        if parsed is None or not self.owner.exists(parsed):
            raise APIError(ErrorCode.NOT_FOUND, f"{self.owner.noun} not found")
        result = self.session.execute(
            delete(self.model).where(getattr(self.model, self.owner.field) == parsed)
        )
        commit(self.session, self.noun)
        return int(result.rowcount)  # type: ignore[attr-defined]

    def register(self, bp: Blueprint, rule: str, endpoint: str, listable: bool = False) -> None:
        self.add_route(bp, f"{rule}/link", f"{endpoint}_create", self.create_view, ["POST"], True)
        self.add_route(bp, f"{rule}/link/<id_>", f"{endpoint}_read", self.read_view, ["GET"])
        self.add_route(
            bp, f"{rule}/link/<id_>", f"{endpoint}_delete", self.delete_view, ["DELETE"]
        )
        self.add_route(
            bp,
            f"{rule}/{self.owner.route}/<id_>/links",
            f"{endpoint}_owner_links",
            self.owner_links_view,
            ["GET"],
        )
        self.add_route(
            bp,
            f"{rule}/{self.target.route}/<id_>/links",
            f"{endpoint}_target_links",
            self.target_links_view,
            ["GET"],
        )
        if self.removable:
            self.add_route(
                bp,
                f"{rule}/{self.owner.route}/<id_>/links",
                f"{endpoint}_remove_links",
                self.remove_links_view,
                ["DELETE"],
            )

    def owner_links_view(self, id_: str) -> ResponseReturnValue:
        links = self.links_of(self.owner, id_)
        return views.success(
            [to_dict(link) for link in links], f"{self.title}s retrieved successfully"
        )

    def target_links_view(self, id_: str) -> ResponseReturnValue:
        links = self.links_of(self.target, id_)
        return views.success(
            [to_dict(link) for link in links], f"{self.title}s retrieved successfully"
        )

    def remove_links_view(self, id_: str) -> ResponseReturnValue:
        count = self.remove_all(id_)
        return views.success({"deleted": count}, f"{self.title}s deleted successfully")

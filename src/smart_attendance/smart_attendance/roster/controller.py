from __future__ import annotations

from flask import Flask, request

from ..common.responses import fail, ok
from ..core.exceptions import DomainError
from ..container import Container
from .model import Person


def _person_ui(p: Person) -> dict:
    return {
        "person_id": p.person_id,
        "name": p.name,
        "created_at": p.created_at.isoformat(timespec="seconds"),
        "has_photo": bool(p.photo_ref),
    }


def register(app: Flask, container: Container) -> None:
    service = container.roster_service

    @app.route("/api/roster", methods=["GET"], endpoint="roster_list")
    def roster_list():
        return ok({"people": [_person_ui(p) for p in service.list_people()]})

    @app.route("/api/roster", methods=["POST"], endpoint="roster_add")
    def roster_add():
        data = request.get_json(silent=True) or {}
        try:
            person = service.register(data.get("name", ""), photo_ref=data.get("photo_ref"))
        except DomainError as e:
            return fail(e)
        return ok({"person": _person_ui(person)}, 201)

    @app.route("/api/roster/<person_id>", methods=["PUT"], endpoint="roster_rename")
    def roster_rename(person_id: str):
        data = request.get_json(silent=True) or {}
        try:
            service.rename(person_id, data.get("name", ""))
            person = service.get(person_id)
        except DomainError as e:
            return fail(e)
        return ok({"person": _person_ui(person)})

    @app.route("/api/roster/<person_id>", methods=["DELETE"], endpoint="roster_delete")
    def roster_delete(person_id: str):
        try:
            service.delete(person_id)
        except DomainError as e:
            return fail(e)
        return ok()

from __future__ import annotations

from flask import jsonify

from ..core.exceptions import DomainError, NotFoundError


def ok(payload: dict | None = None, status: int = 200):
    body = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def fail(exc: DomainError):
    status = 404 if isinstance(exc, NotFoundError) else 400
    return jsonify({"success": False, "message": str(exc)}), status

from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import DomainError, MissingSchedule, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def ok(payload=None, status: int = 200):
    body = {"success": True}
    if payload is not None:
        body["data"] = payload
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error(e: DomainError):
    """Map a domain exception to its JSON error response."""

    if isinstance(e, ValidationError):
        return fail(str(e), 400)
    if isinstance(e, NotFoundError):
        return fail(str(e), 404)
    if isinstance(e, MissingSchedule):
        return fail(str(e), 422)
    return fail(str(e), 400)


def system_error(action: str):
    logger.exception("Unexpected error while %s", action)
    return fail(f"System error while {action}", 500)

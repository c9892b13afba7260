from __future__ import annotations

from typing import Any, Mapping

from flask import Response, jsonify, request

from ..core.exceptions import NotFoundError, ValidationError


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def to_fields(body: Mapping[str, Any], names: Mapping[str, str]) -> dict[str, Any]:
    """Rename camelCase request keys to service field names.

    Only keys present in ``body`` are copied, so the result doubles as a patch.
    """
    return {field: body[key] for key, field in names.items() if key in body}


def found(record: Any, entity: str, record_id: str) -> Any:
    if record is None:
        raise NotFoundError(entity, record_id)
    return record


def no_content(deleted: bool, entity: str, record_id: str) -> tuple[Response, int] | tuple[str, int]:
    if not deleted:
        raise NotFoundError(entity, record_id)
    return "", 204


def created(payload: Any) -> tuple[Response, int]:
    return jsonify(payload), 201

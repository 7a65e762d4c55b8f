"""Response envelope and request-body helpers for the JSON API."""
from flask import jsonify, request

from ..exceptions import ValidationError


def ok(message: str, data=None, status: int = 200):
    return jsonify({"success": True, "message": message, "data": data if data is not None else {}}), status


def json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body

from typing import Any, Dict, Optional
from flask import request, jsonify
from marshmallow import ValidationError as MarshmallowValidationError

def ok(payload: Any, status: int = 200):
    return jsonify(payload), status


def error(code: str, message: str, status: int = 400, **extra):
    body: Dict[str, Any] = {"code": code, "message": message}
    if extra:
        body.update(extra)
    return jsonify(body), status


def error_from(exc):
    """Render a CalorieTrackerError with its code, message and status."""
    return error(exc.code, exc.message, exc.status, **exc.extra)


def json_body() -> Dict[str, Any]:
    # Try parsing as JSON first (force=True allows missing Content-Type header)
    data = request.get_json(force=True, silent=True)
    if isinstance(data, dict):
        return data
    # Fallback to form data (converted to dict) if JSON parsing fails
    return request.form.to_dict() if request.form else {}


def arg_str(name: str, default: Optional[str] = None) -> Optional[str]:
    val = request.args.get(name)
    if val is None or val == "":
        return default
    return val


def validate_schema(schema_cls, data: Dict[str, Any]):
    """Load data with a marshmallow schema, returning (result, errors)."""
    try:
        return schema_cls().load(data), None
    except MarshmallowValidationError as err:
        return None, err.messages

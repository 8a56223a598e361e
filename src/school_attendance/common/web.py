"""Flask helpers shared by the controllers: session guards and JSON responses."""
from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .serialization import from_payload, to_payload


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Please log in to continue")
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                raise AuthenticationError("Please log in to continue")
            if session.get("role") not in allowed:
                raise AuthorizationError("You do not have permission for this action")
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = roles_required(Role.ADMIN)
# Preceptor privileges are a subset of Admin's.
preceptor_required = roles_required(Role.ADMIN, Role.PRECEPTOR)
student_required = roles_required(Role.STUDENT)


def current_user_id() -> int:
    return int(session["user_id"])


def json_body() -> dict[str, Any]:
    """Request JSON converted to snake_case keys."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return from_payload(payload)


def query_arg(name: str, *, required: bool = False) -> Optional[str]:
    value = (request.args.get(name) or "").strip() or None
    if required and value is None:
        raise ValidationError(f"Missing query parameter: {name}")
    return value


def serialize(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    if hasattr(value, "__dataclass_fields__"):
        return to_payload(value)
    return value


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = serialize(data)
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status

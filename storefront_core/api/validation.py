"""Request validation decorator.

@validate_request inspects the view's signature. A parameter annotated
with a pydantic model is filled from the request body (JSON, or form
data for HTML forms); all other parameters (URL path variables) pass
through untouched.

    @auth_bp.post("/login")
    @validate_request
    def login(data: LoginRequest):
        ...

Invalid bodies raise ValidationError with per-field messages:

    {"error": {"type": "ValidationError",
               "message": "Invalid request data",
               "details": {"fields": {"password": ["..."]}}}}
"""

import inspect
from functools import wraps
from typing import get_type_hints

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError


def _find_model_param(f) -> tuple[str, type[BaseModel]] | None:
    hints = get_type_hints(f)
    for name in inspect.signature(f).parameters:
        hint = hints.get(name)
        if inspect.isclass(hint) and issubclass(hint, BaseModel):
            return name, hint
    return None


def _field_errors(error: PydanticValidationError) -> dict[str, list[str]]:
    """Group pydantic error messages by dotted field path."""
    fields: dict[str, list[str]] = {}
    for err in error.errors():
        key = ".".join(str(part) for part in err["loc"]) or "_"
        fields.setdefault(key, []).append(err["msg"])
    return fields


def _request_payload() -> dict | None:
    payload = request.get_json(silent=True)
    if payload is None and request.form:
        payload = request.form.to_dict()
    return payload


def validate_request(f):
    """Validate the request body against the view's pydantic parameter."""
    model_param = _find_model_param(f)

    @wraps(f)
    def wrapper(*args, **kwargs):
        if model_param is not None:
            name, model = model_param
            payload = _request_payload()
            if not isinstance(payload, dict):
                raise ValidationError(
                    "Request body must be a JSON object",
                    {"fields": {"_": ["Expected a JSON object"]}}
                )
            try:
                kwargs[name] = model.model_validate(payload)
            except PydanticValidationError as e:
                raise ValidationError(details={"fields": _field_errors(e)}) from e

        return f(*args, **kwargs)

    return wrapper

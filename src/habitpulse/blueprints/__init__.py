"""Blueprint exports and shared request helpers."""

from __future__ import annotations

from typing import TypeVar

from flask import request
from pydantic import BaseModel, ValidationError

from ..errors import InvalidInput

FormT = TypeVar("FormT", bound=BaseModel)


def json_body() -> dict:
    """Return the request's JSON object, or an empty dict when there is none."""

    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")
    return data


def validate_form(form_cls: type[FormT], payload: dict) -> FormT:
    """Validate ``payload`` against a pydantic form, raising InvalidInput on the first error."""

    try:
        return form_cls.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        first = errors[0] if errors else {}
        message = str(first.get("msg", "Invalid input"))
        # pydantic prefixes custom validator messages with "Value error, ".
        message = message.removeprefix("Value error, ")
        loc = first.get("loc", ())
        if loc and not message.lower().startswith(str(loc[0]).lower()):
            message = f"{loc[0]}: {message}"
        raise InvalidInput(message) from exc


__all__ = ["json_body", "validate_form"]

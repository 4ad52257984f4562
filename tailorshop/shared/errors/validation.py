# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

_JSON_SCALARS = (str, int, float, bool, type(None))


def _describe(error: Any) -> dict[str, Any]:
    path = ".".join(str(part) for part in error.get("loc", ()) if part is not None)
    described: dict[str, Any] = {
        "field": path or "body",
        "type": error.get("type", "value_error"),
        "message": error.get("msg", "Invalid value"),
    }
    if ctx := error.get("ctx"):
        described["ctx"] = {
            key: value if isinstance(value, _JSON_SCALARS) else str(value)
            for key, value in ctx.items()
        }
    return described


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Flattens pydantic errors into ``{"fields": [...], "errors": [...]}``.

    Model-level errors have no location and are reported against ``body``;
    they do not appear in ``fields``.
    """
    errors = [_describe(error) for error in exc.errors()]
    fields = sorted({error["field"] for error in errors if error["field"] != "body"})
    return {"fields": fields, "errors": errors}


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    context = format_pydantic_errors(exc)
    errors = context["errors"]
    message = errors[0]["message"] if errors else "Request data is invalid"
    raise ValidationError(message=message, context=context) from exc


__all__ = ["format_pydantic_errors", "raise_validation_error"]

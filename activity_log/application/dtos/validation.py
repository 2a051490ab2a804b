"""Helpers shared by the boundary validation schemas."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from activity_log.domain.errors import ValidationError
from activity_log.utils import ensure_utc, parse_iso_instant

ModelT = TypeVar("ModelT", bound=BaseModel)


def normalize_activity_type(value: Any) -> Any:
    """Upper-case string activity types before enum validation."""

    if isinstance(value, str):
        return value.strip().upper()
    return value


def coerce_iso_instant(value: Any) -> datetime | None:
    """Accept ``datetime`` objects or ISO-8601 strings, nothing else."""

    if value is None or isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str):
        raise ValueError("must be an ISO-8601 date-time string")
    try:
        return parse_iso_instant(value)
    except ValueError as exc:
        raise ValueError(f"{value!r} is not a valid ISO-8601 date-time") from exc


def _field_name(location: tuple[Any, ...]) -> str | None:
    return ".".join(str(part) for part in location) or None


def validate_payload(model: type[ModelT], payload: Any) -> ModelT:
    """Validate ``payload`` against ``model``.

    Pydantic errors are converted to the domain ``ValidationError`` so both
    edges report problems the same way.
    """

    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True)
    if not isinstance(payload, Mapping):
        raise ValidationError(
            f"Expected a JSON object, got {type(payload).__name__}", value=payload
        )
    try:
        return model.model_validate(dict(payload))
    except SchemaValidationError as exc:
        errors = [
            {
                "field": _field_name(error["loc"]),
                "message": error["msg"],
                "value": error.get("input"),
            }
            for error in exc.errors(include_url=False)
        ]
        fields = ", ".join(sorted({e["field"] for e in errors if e["field"]}))
        first = errors[0] if errors else {"field": None, "value": None}
        raise ValidationError(
            f"Validation Error: invalid {fields or 'payload'}",
            field=first["field"],
            value=first["value"],
            errors=errors,
        ) from exc


__all__ = [
    "coerce_iso_instant",
    "normalize_activity_type",
    "validate_payload",
]

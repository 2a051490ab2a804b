"""Schema validating filter and pagination requests on the read path."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .validation import coerce_iso_instant

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Keeps the row offset within a signed 64-bit integer.
MAX_PAGE = (2**63 - 1) // MAX_LIMIT


class ActivityLogQuery(BaseModel):
    """Filter and pagination options for listing activity logs."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page: int = Field(default=DEFAULT_PAGE, ge=1, le=MAX_PAGE)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    user_id: str | None = Field(default=None, alias="userId")
    activity_type: str | None = Field(default=None, alias="activityType")
    start_date: datetime | None = Field(default=None, alias="startDate")
    end_date: datetime | None = Field(default=None, alias="endDate")

    @field_validator("page", "limit", mode="before")
    @classmethod
    def default_when_missing(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or value == "":
            return DEFAULT_PAGE if info.field_name == "page" else DEFAULT_LIMIT
        return value

    @field_validator("user_id", "activity_type", mode="before")
    @classmethod
    def blank_as_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_bounds(cls, value: Any) -> datetime | None:
        if value == "":
            return None
        return coerce_iso_instant(value)


__all__ = ["ActivityLogQuery", "DEFAULT_LIMIT", "DEFAULT_PAGE", "MAX_LIMIT", "MAX_PAGE"]

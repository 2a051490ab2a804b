"""Schemas for activity log endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from activity_log.application.dtos import PaginationMeta, UserActivityLogDTO


class ActivityLogPublished(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "success"
    message: str = "Activity log published successfully"
    event_id: str = Field(..., alias="eventId")


class ActivityLogRead(BaseModel):
    status: str = "success"
    data: UserActivityLogDTO


class ActivityLogListRead(BaseModel):
    status: str = "success"
    data: list[UserActivityLogDTO]
    meta: PaginationMeta


class UserActivityLogsRead(BaseModel):
    status: str = "success"
    data: list[UserActivityLogDTO]


class HealthRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "ok"
    service: str
    kafka_connected: bool | None = Field(default=None, alias="kafkaConnected")
    database_connected: bool | None = Field(default=None, alias="databaseConnected")


__all__ = [
    "ActivityLogListRead",
    "ActivityLogPublished",
    "ActivityLogRead",
    "HealthRead",
    "UserActivityLogsRead",
]

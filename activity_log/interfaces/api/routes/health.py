"""Liveness endpoint shared by both services."""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from activity_log.interfaces.api.schemas import HealthRead

router = APIRouter(prefix="/api", tags=["health"])


@router.get(
    "/health",
    response_model=HealthRead,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def health_check(request: Request) -> HealthRead:
    """Report the service name and the state of its connections."""

    state = request.app.state
    publisher = getattr(state, "publisher", None)
    database = getattr(state, "database", None)
    is_healthy = getattr(publisher, "is_healthy", None)
    return HealthRead(
        service=getattr(state, "service_name", "activity-log"),
        kafka_connected=bool(is_healthy()) if callable(is_healthy) else None,
        database_connected=database.connected if database is not None else None,
    )


__all__ = ["router"]

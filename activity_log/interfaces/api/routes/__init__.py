from fastapi import FastAPI

from .health import router as health_router
from .logs import router as logs_router
from .publish import router as publish_router


def register_producer_routes(app: FastAPI) -> None:
    """Register the routers served by the producer service."""

    app.include_router(health_router)
    app.include_router(publish_router)


def register_consumer_routes(app: FastAPI) -> None:
    """Register the routers served by the consumer service."""

    app.include_router(health_router)
    app.include_router(logs_router)

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from activity_log.application.ports import ActivityLogPublisher
from activity_log.config import Settings, get_settings
from activity_log.infrastructure.database import Database
from activity_log.infrastructure.messaging import KafkaActivityLogProducer
from activity_log.interfaces.api.errors import register_exception_handlers
from activity_log.interfaces.api.routes import (
    register_consumer_routes,
    register_producer_routes,
)
from activity_log.interfaces.worker import build_consumer
from activity_log.utils import configure_logging


def _base_app(settings: Settings, service_name: str, lifespan) -> FastAPI:
    app = FastAPI(title=service_name, lifespan=lifespan)
    app.state.service_name = service_name
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    return app


def create_producer_app(
    settings: Settings | None = None,
    *,
    publisher: ActivityLogPublisher | None = None,
) -> FastAPI:
    """Crea la aplicación del servicio productor (``POST /api/logs``)."""

    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Conecta el productor de Kafka al arrancar y lo cierra al terminar."""

        owned = publisher is None
        app.state.publisher = publisher or KafkaActivityLogProducer(settings)
        if owned:
            app.state.publisher.connect()
        yield
        if owned:
            app.state.publisher.disconnect()
        app.state.publisher = None

    app = _base_app(settings, "producer-service", lifespan)
    register_producer_routes(app)
    return app


def create_consumer_app(
    settings: Settings | None = None,
    *,
    database: Database | None = None,
    start_consumer: bool | None = None,
) -> FastAPI:
    """Crea la aplicación del servicio consumidor (consultas y consumo de Kafka)."""

    settings = settings or get_settings()
    configure_logging(settings.log_level)
    if start_consumer is None:
        start_consumer = settings.run_consumer_in_api

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Inicializa la base de datos y, opcionalmente, el consumidor de Kafka."""

        db = database or Database(settings.database_url)
        db.connect()
        app.state.database = db

        consumer = dead_letter = None
        if start_consumer:
            consumer, dead_letter = build_consumer(settings, db)
            consumer.connect()
            consumer.start()
        app.state.consumer = consumer
        yield
        if consumer is not None:
            consumer.stop()
            consumer.disconnect()
        if dead_letter is not None:
            dead_letter.disconnect()
        if database is None:
            db.disconnect()
        app.state.database = None

    app = _base_app(settings, "consumer-service", lifespan)
    register_consumer_routes(app)
    return app


if __name__ == "__main__":
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(description="Run an activity log HTTP service.")
    parser.add_argument("service", choices=("producer", "consumer"))
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args()

    if args.service == "producer":
        uvicorn.run(create_producer_app(), host=args.host, port=args.port or 3000)
    else:
        uvicorn.run(create_consumer_app(), host=args.host, port=args.port or 3001)

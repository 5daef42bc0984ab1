"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from app.adapters.inbound.http.error_handlers import register_exception_handlers
from app.adapters.inbound.http.routes import router
from app.adapters.outbound.persistence.models import Base
from app.infrastructure.config.settings import settings
from app.infrastructure.db import get_engine
from app.infrastructure.logging.logger import log_event
from app.infrastructure.wiring.dependencies import (
    create_vehicle_created_consumer,
    get_outbox_relay_worker,
    shutdown_outbox_relay_worker,
)

# Load environment variables from .env file
load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema if requested and run the background workers."""
    if settings.database_auto_create:
        Base.metadata.create_all(bind=get_engine())

    consumer = None
    if settings.kafka_enabled:
        get_outbox_relay_worker().start()
        if settings.kafka_consumer_enabled:
            consumer = create_vehicle_created_consumer()
            consumer.start()
    else:
        log_event(
            component="app",
            event="outbox_relay_disabled",
            level=logging.WARNING,
            reason="KAFKA_ENABLED is false, vehicle events stay in the outbox",
        )
    log_event(component="app", event="startup", kafka_enabled=settings.kafka_enabled)

    yield

    if consumer is not None:
        consumer.stop()
    shutdown_outbox_relay_worker()
    log_event(component="app", event="shutdown")


app = FastAPI(
    title="Garage Management Service",
    description="Garages, vehicles and accessories with Kafka vehicle events",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)
app.include_router(router)

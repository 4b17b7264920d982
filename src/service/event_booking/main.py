"""
Event Booking Service - Main Application
Handles user authentication, the event catalogue, and seat bookings.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


SERVICE_NAME = 'event-booking-service'


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Event Booking] Starting up...')

    # Setup OpenTelemetry tracing
    tracing = TracingConfig(service_name=SERVICE_NAME)
    tracing.setup()
    Logger.base.info('📊 [Event Booking] OpenTelemetry tracing configured')

    tracing.instrument_sqlalchemy(engine=get_engine())
    await create_db_and_tables()
    Logger.base.info('🗄️ [Event Booking] Database tables ready')

    container.wire(modules=WIRE_MODULES)
    setup()
    Logger.base.info('🔌 [Event Booking] Dependency injection wired')

    Logger.base.info('✅ [Event Booking] Startup complete')

    yield

    Logger.base.info('🛑 [Event Booking] Shutting down...')

    await dispose_engine()
    Logger.base.info('🗄️ [Event Booking] Database engine disposed')

    # Shutdown tracing (flush remaining spans)
    tracing.shutdown()

    container.unwire()

    Logger.base.info('👋 [Event Booking] Shutdown complete')


app = create_app(
    lifespan=lifespan,
    description='Handles user authentication, the event catalogue, and seat bookings',
    service_name=SERVICE_NAME,
)

"""
Production FastAPI Application

Train booking API with the notification worker running in the background.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Train Booking] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Train Booking] Dependency injection wired')

    database = container.database()
    await database.create_tables()

    dispatcher = container.notification_dispatcher()
    dispatcher.open()

    async with anyio.create_task_group() as tg:
        tg.start_soon(dispatcher.run)
        Logger.base.info('✅ [Train Booking] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Train Booking] Shutting down...')
        # Closing the stream lets the worker drain what is queued, then exit
        await dispatcher.close()

    await database.dispose()
    container.unwire()

    Logger.base.info('👋 [Train Booking] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')

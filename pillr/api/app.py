"""FastAPI application configuration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI

from pillr import __version__
from pillr.api.dependencies import verify_token
from pillr.api.health import router as health_router
from pillr.api.medications import router as medications_router
from pillr.api.models import ErrorResponse
from pillr.api.sms import router as sms_router
from pillr.database.connection import dispose_engine
from pillr.observability.sentry import init_sentry
from pillr.sms import get_sms_provider
from pillr.utils.logging import configure_logging

load_dotenv()
configure_logging()
init_sentry()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Build the SMS provider on startup and release the database pool on shutdown.

    A misconfigured SMS provider raises here and stops the app from starting.
    """
    application.state.sms_provider = get_sms_provider()
    yield
    dispose_engine()
    logger.info("Database connections disposed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    :returns: Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Pillr API",
        version=__version__,
        lifespan=lifespan,
        responses={
            401: {"model": ErrorResponse, "description": "Unauthorised"},
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
    )

    # SMS routes carry their own auth: cron secret for the sweep, bearer token otherwise
    application.include_router(health_router)
    application.include_router(sms_router)
    application.include_router(medications_router, dependencies=[Depends(verify_token)])

    logger.info("FastAPI application created")

    return application


# Application instance for uvicorn
app = create_app()

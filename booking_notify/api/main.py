"""FastAPI application entry point for the booking notifier."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from structlog import get_logger

from booking_notify import __version__
from booking_notify.api.middleware.logging_middleware import LoggingMiddleware
from booking_notify.api.routes.health import router as health_router
from booking_notify.api.routes.triggers import router as triggers_router
from booking_notify.bootstrap.notifier import Notifier, notifier_lifespan
from booking_notify.config.notifier_config import NotifierConfig
from booking_notify.infrastructure.observability import configure_structlog

logger = get_logger()


def create_app(
    notifier: Notifier | None = None,
    config: NotifierConfig | None = None,
) -> FastAPI:
    """Create the notifier API.

    Args:
        notifier: Pre-wired notifier. When given, the lifespan leaves it in
            place and creates no HTTP client.
        config: Configuration for the notifier the lifespan builds. Read from
            the environment at startup when omitted.

    Returns:
        The FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "notifier", None) is not None:
            yield
            return

        resolved = config or NotifierConfig.from_environment()
        configure_structlog(resolved.environment)
        async with notifier_lifespan(resolved) as created:
            app.state.notifier = created
            logger.info("notifier_started", environment=resolved.environment)
            try:
                yield
            finally:
                app.state.notifier = None
                logger.info("notifier_stopped")

    app = FastAPI(
        title="Booking Notifier API",
        description="Push notifications for booking status changes",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.notifier = notifier

    app.add_middleware(LoggingMiddleware)
    app.include_router(health_router)
    app.include_router(triggers_router)
    return app


app = create_app()

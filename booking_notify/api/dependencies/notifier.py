"""Notifier FastAPI dependencies.

The notifier is created by the application lifespan (or handed to
``create_app`` by a test) and stored on ``app.state``; routes reach it
through these dependencies instead of a module-level singleton.
"""

from fastapi import HTTPException, Request

from booking_notify.application.services.booking_trigger_service import (
    BookingTriggerService,
)
from booking_notify.bootstrap.notifier import Notifier


def get_notifier(request: Request) -> Notifier:
    """Return the notifier attached to the running application.

    Raises:
        HTTPException: 503 if the application has not finished starting.
    """
    notifier = getattr(request.app.state, "notifier", None)
    if notifier is None:
        raise HTTPException(
            status_code=503,
            detail={
                "type": "urn:booking-notify:error:not-ready",
                "title": "Notifier Not Ready",
                "status": 503,
                "detail": "The notifier has not been initialized",
                "instance": str(request.url),
            },
        )
    return notifier


def get_trigger_service(request: Request) -> BookingTriggerService:
    """Return the booking trigger service of the running notifier."""
    return get_notifier(request).trigger_service

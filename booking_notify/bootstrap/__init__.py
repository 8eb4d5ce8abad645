"""Bootstrap wiring: builds the notifier and its collaborators explicitly."""

from booking_notify.bootstrap.notifier import (
    Notifier,
    build_notifier,
    build_pipeline,
    create_notifier,
    initialize_firebase_app,
    notifier_lifespan,
)

__all__ = [
    "Notifier",
    "build_notifier",
    "build_pipeline",
    "create_notifier",
    "initialize_firebase_app",
    "notifier_lifespan",
]

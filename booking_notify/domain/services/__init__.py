"""Pure domain services: change classification and notification policies."""

from booking_notify.domain.services.change_classifier import classify, classify_event
from booking_notify.domain.services.notification_policy import (
    GENERIC_TITLE,
    NotificationPolicy,
    ProviderNotificationPolicy,
    UserNotificationPolicy,
)

__all__: list[str] = [
    "GENERIC_TITLE",
    "NotificationPolicy",
    "ProviderNotificationPolicy",
    "UserNotificationPolicy",
    "classify",
    "classify_event",
]

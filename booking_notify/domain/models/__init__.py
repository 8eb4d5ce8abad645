"""Domain models for the booking notifier."""

from booking_notify.domain.models.booking import (
    PROVIDER_INITIATED_STATUSES,
    USER_INITIATED_STATUSES,
    Booking,
    BookingStatus,
)
from booking_notify.domain.models.change_event import BookingChangeEvent
from booking_notify.domain.models.notification import (
    INVALID_REGISTRATION_TOKEN,
    PERMANENTLY_INVALID_ERROR_CODES,
    REGISTRATION_TOKEN_NOT_REGISTERED,
    Decision,
    DeliveryOutcome,
    NotificationPayload,
    Notify,
    PayloadStyle,
    RecipientRole,
    Skip,
    TokenOutcome,
)
from booking_notify.domain.models.transition import Transition, TransitionKind

__all__: list[str] = [
    "INVALID_REGISTRATION_TOKEN",
    "PERMANENTLY_INVALID_ERROR_CODES",
    "PROVIDER_INITIATED_STATUSES",
    "REGISTRATION_TOKEN_NOT_REGISTERED",
    "USER_INITIATED_STATUSES",
    "Booking",
    "BookingChangeEvent",
    "BookingStatus",
    "Decision",
    "DeliveryOutcome",
    "NotificationPayload",
    "Notify",
    "PayloadStyle",
    "RecipientRole",
    "Skip",
    "TokenOutcome",
    "Transition",
    "TransitionKind",
]

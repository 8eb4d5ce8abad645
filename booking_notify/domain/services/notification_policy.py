"""Notification policy domain service.

Decides whether a booking transition warrants a notification for one
recipient role, and builds the payload when it does.

A recipient is only ever told about actions taken by the OTHER party:
- The provider is notified of user actions (new booking, user cancellation)
- The user is notified of provider actions (accept, reject, provider cancellation)

Developer Golden Rules:
1. Policies are pure - the decision depends only on the transition passed in
2. No "already notified" state; at-most-once per write follows from purity
3. DELETED, UNCHANGED and MALFORMED always skip, for both roles
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType

from structlog import get_logger

from booking_notify.domain.models.booking import (
    PROVIDER_INITIATED_STATUSES,
    USER_INITIATED_STATUSES,
    Booking,
    BookingStatus,
)
from booking_notify.domain.models.notification import (
    Decision,
    NotificationPayload,
    Notify,
    PayloadStyle,
    RecipientRole,
    Skip,
)
from booking_notify.domain.models.transition import Transition, TransitionKind

logger = get_logger()

SKIP_DELETED = "booking deleted"
SKIP_UNCHANGED = "status unchanged"
SKIP_MALFORMED = "malformed snapshot"
SKIP_CHANGED_BY_PROVIDER = "changed by provider"
SKIP_CHANGED_BY_USER = "changed by user"

# Used when a firing status has no entry in the title lookup
GENERIC_TITLE = "Booking updated"

PROVIDER_TITLES: Mapping[BookingStatus, str] = MappingProxyType(
    {
        BookingStatus.CREATED: "You have a new booking!",
        BookingStatus.USER_CANCELLED: "A booking was cancelled",
    }
)

USER_TITLES: Mapping[BookingStatus, str] = MappingProxyType(
    {
        BookingStatus.ACCEPTED: "Your booking was accepted",
        BookingStatus.REJECTED: "Your booking was declined",
        BookingStatus.PROVIDER_CANCELLED: "Your booking was cancelled",
    }
)

_USER_OUTCOME_PHRASES: Mapping[BookingStatus, str] = MappingProxyType(
    {
        BookingStatus.ACCEPTED: "accepted",
        BookingStatus.REJECTED: "declined",
        BookingStatus.PROVIDER_CANCELLED: "cancelled by the provider",
    }
)


class NotificationPolicy(ABC):
    """Base policy for one recipient role.

    Subclasses declare which target statuses fire, the skip reason used for
    everything else, and how the payload is built.

    Attributes:
        role: Recipient role this policy decides for.
        style: Payload shape built on Notify.
    """

    role: RecipientRole
    firing_statuses: frozenset[BookingStatus]
    skip_reason: str

    def __init__(
        self,
        style: PayloadStyle,
        titles: Mapping[BookingStatus, str] | None = None,
    ) -> None:
        """Initialize the policy.

        Args:
            style: Payload shape to build when the policy fires.
            titles: Status to title lookup for human-readable payloads.
        """
        self.style = style
        self._titles = titles if titles is not None else self.default_titles()

    @classmethod
    @abstractmethod
    def default_titles(cls) -> Mapping[BookingStatus, str]:
        """Title lookup used when none is injected."""

    def evaluate(self, transition: Transition) -> Decision:
        """Decide whether to notify for a transition.

        Args:
            transition: Classified booking write.

        Returns:
            Skip with a reason, or Notify with the payload to send.
        """
        if transition.kind is TransitionKind.DELETED:
            return Skip(SKIP_DELETED)
        if transition.kind is TransitionKind.UNCHANGED:
            return Skip(SKIP_UNCHANGED)
        if transition.kind is TransitionKind.MALFORMED:
            return Skip(SKIP_MALFORMED)

        if not self.fires_on(transition):
            return Skip(self.skip_reason)

        booking, status = transition.booking, transition.to_status
        if booking is None or status is None:
            return Skip(self.skip_reason)
        return Notify(self.build_payload(booking, status))

    def fires_on(self, transition: Transition) -> bool:
        return transition.to_status in self.firing_statuses

    def title_for(self, status: BookingStatus) -> str:
        title = self._titles.get(status)
        if title is None:
            logger.warning(
                "notification_title_unmapped",
                role=self.role.value,
                status=status.name,
                fallback=GENERIC_TITLE,
            )
            return GENERIC_TITLE
        return title

    def build_payload(
        self, booking: Booking, status: BookingStatus
    ) -> NotificationPayload:
        if self.style is PayloadStyle.DATA:
            return NotificationPayload.structured(self.data_for(booking, status))
        return NotificationPayload.human_readable(
            title=self.title_for(status),
            body=self.body_for(booking, status),
        )

    @abstractmethod
    def body_for(self, booking: Booking, status: BookingStatus) -> str:
        """Human-readable body text."""

    @abstractmethod
    def data_for(self, booking: Booking, status: BookingStatus) -> dict[str, str]:
        """Identifier-only data bag."""


class ProviderNotificationPolicy(NotificationPolicy):
    """Notifies the provider panel of actions taken by the user.

    Fires on creation (there is no previous status to compare) and on
    transitions into a user-initiated status. Any other change was made by
    the provider and is skipped.
    """

    role = RecipientRole.PANEL
    firing_statuses = USER_INITIATED_STATUSES
    skip_reason = SKIP_CHANGED_BY_PROVIDER

    def __init__(
        self,
        style: PayloadStyle = PayloadStyle.NOTIFICATION,
        titles: Mapping[BookingStatus, str] | None = None,
    ) -> None:
        super().__init__(style=style, titles=titles)

    @classmethod
    def default_titles(cls) -> Mapping[BookingStatus, str]:
        return PROVIDER_TITLES

    def fires_on(self, transition: Transition) -> bool:
        if transition.kind is TransitionKind.CREATED:
            return True
        return super().fires_on(transition)

    def body_for(self, booking: Booking, status: BookingStatus) -> str:
        service = booking.service_name or "A booking"
        user = booking.user_name or "a customer"
        return f"{service} from {user}."

    def data_for(self, booking: Booking, status: BookingStatus) -> dict[str, str]:
        data = {"bookingId": booking.booking_id, "status": str(int(status))}
        if booking.user_id:
            data["userId"] = booking.user_id
        return data


class UserNotificationPolicy(NotificationPolicy):
    """Notifies the booking user of actions taken by the provider.

    Creation is the user's own action and is skipped, as is every
    transition into a user-initiated status.
    """

    role = RecipientRole.CLIENT
    firing_statuses = PROVIDER_INITIATED_STATUSES
    skip_reason = SKIP_CHANGED_BY_USER

    def __init__(
        self,
        style: PayloadStyle = PayloadStyle.DATA,
        titles: Mapping[BookingStatus, str] | None = None,
    ) -> None:
        super().__init__(style=style, titles=titles)

    @classmethod
    def default_titles(cls) -> Mapping[BookingStatus, str]:
        return USER_TITLES

    def fires_on(self, transition: Transition) -> bool:
        if transition.kind is TransitionKind.CREATED:
            return False
        return super().fires_on(transition)

    def body_for(self, booking: Booking, status: BookingStatus) -> str:
        service = booking.service_name or "your service"
        phrase = _USER_OUTCOME_PHRASES.get(status, "updated")
        return f"Your booking for {service} was {phrase}."

    def data_for(self, booking: Booking, status: BookingStatus) -> dict[str, str]:
        return {
            "bookingId": booking.booking_id,
            "providerId": booking.provider_id,
            "status": str(int(status)),
        }

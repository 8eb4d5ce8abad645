"""Semantic transitions of a booking between two snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from booking_notify.domain.models.booking import Booking, BookingStatus


class TransitionKind(str, Enum):
    """What a single write did to a booking.

    Values:
        CREATED: No previous snapshot, a current one exists.
        STATUS_CHANGED: Both snapshots exist and the status differs.
        UNCHANGED: Both snapshots exist with the same status.
        DELETED: No current snapshot.
        MALFORMED: A snapshot was present but unusable.
    """

    CREATED = "created"
    STATUS_CHANGED = "status_changed"
    UNCHANGED = "unchanged"
    DELETED = "deleted"
    MALFORMED = "malformed"


@dataclass(frozen=True, eq=True)
class Transition:
    """Tagged result of classifying one booking write.

    Attributes:
        kind: The semantic transition.
        from_status: Previous status (None for CREATED and when previous is absent).
        to_status: New status (None for DELETED).
        booking: The current snapshot, or the previous one for DELETED
            (None when both are absent).
    """

    kind: TransitionKind
    from_status: BookingStatus | None = None
    to_status: BookingStatus | None = None
    booking: Booking | None = None

    @property
    def is_terminal(self) -> bool:
        """True when no policy can act on this transition."""
        return self.kind in (
            TransitionKind.DELETED,
            TransitionKind.UNCHANGED,
            TransitionKind.MALFORMED,
        )

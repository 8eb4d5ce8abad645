"""Change classification domain service.

Turns the before/after snapshots of one booking write into a semantic
``Transition``. Pure function, no side effects.

Classification rules (first match wins):
- a present snapshot was unusable -> MALFORMED (event level, see classify_event)
- current absent -> DELETED (whatever previous holds)
- previous absent -> CREATED
- same status -> UNCHANGED
- otherwise -> STATUS_CHANGED(from, to)

Snapshots that were present but empty have already been reduced to None
by ``Booking.from_snapshot``.
"""

from __future__ import annotations

from booking_notify.domain.models.booking import Booking
from booking_notify.domain.models.change_event import BookingChangeEvent
from booking_notify.domain.models.transition import Transition, TransitionKind


def classify(previous: Booking | None, current: Booking | None) -> Transition:
    """Classify a booking write.

    Args:
        previous: Snapshot before the write, or None.
        current: Snapshot after the write, or None.

    Returns:
        The semantic transition for this write.
    """
    if current is None:
        return Transition(
            kind=TransitionKind.DELETED,
            from_status=previous.status if previous is not None else None,
            booking=previous,
        )

    if previous is None:
        return Transition(
            kind=TransitionKind.CREATED,
            to_status=current.status,
            booking=current,
        )

    if previous.status == current.status:
        return Transition(
            kind=TransitionKind.UNCHANGED,
            from_status=previous.status,
            to_status=current.status,
            booking=current,
        )

    return Transition(
        kind=TransitionKind.STATUS_CHANGED,
        from_status=previous.status,
        to_status=current.status,
        booking=current,
    )


def classify_event(event: BookingChangeEvent) -> Transition:
    """Classify a parsed change event.

    An event with an unusable snapshot is MALFORMED whatever the other
    snapshot holds: a missing ``previous`` must not read as a creation, nor
    a missing ``current`` as a deletion.
    """
    if event.malformed is not None:
        return Transition(kind=TransitionKind.MALFORMED)
    return classify(event.previous, event.current)

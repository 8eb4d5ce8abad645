"""Change event: the unit of work handed to the notifier per booking write."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from booking_notify.domain.errors.snapshot import MalformedSnapshotError
from booking_notify.domain.models.booking import Booking


@dataclass(frozen=True)
class BookingChangeEvent:
    """One write to ``bookings/{provider_id}/{booking_id}``.

    Snapshots are parsed at construction time through ``from_raw`` so that
    the rest of the pipeline only ever sees ``Booking`` or ``None``. A
    snapshot that was present but could not be parsed is recorded in
    ``malformed`` instead; such an event is never notified on.

    Attributes:
        provider_id: Provider identity taken from the change path.
        booking_id: Booking identity taken from the change path.
        previous: Snapshot before the write (None on creation).
        current: Snapshot after the write (None on deletion).
        malformed: Which snapshot was unusable and why, if any.
    """

    provider_id: str
    booking_id: str
    previous: Booking | None
    current: Booking | None
    malformed: str | None = None

    @classmethod
    def from_raw(
        cls,
        provider_id: str,
        booking_id: str,
        before: Any,
        after: Any,
    ) -> BookingChangeEvent:
        snapshots: dict[str, Booking | None] = {}
        problems: list[str] = []
        for side, raw in (("before", before), ("after", after)):
            try:
                snapshots[side] = Booking.from_snapshot(
                    raw, booking_id=booking_id, provider_id=provider_id
                )
            except MalformedSnapshotError as e:
                snapshots[side] = None
                problems.append(f"{side}: {e.reason}")

        return cls(
            provider_id=provider_id,
            booking_id=booking_id,
            previous=snapshots["before"],
            current=snapshots["after"],
            malformed="; ".join(problems) or None,
        )

    @property
    def user_id(self) -> str | None:
        """The booking user, read from the newest snapshot that names one."""
        for snapshot in (self.current, self.previous):
            if snapshot is not None and snapshot.user_id:
                return snapshot.user_id
        return None

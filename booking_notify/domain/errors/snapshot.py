"""Errors for booking snapshots that are present but unusable."""

from booking_notify.domain.exceptions import NotifierError


class MalformedSnapshotError(NotifierError):
    """Raised when a non-empty booking snapshot cannot be parsed.

    Empty snapshots are absent, not malformed. A malformed snapshot still
    proves that a record existed, so the write must not be mistaken for a
    creation or a deletion.

    Attributes:
        booking_id: Booking the snapshot belongs to.
        reason: What is wrong with the snapshot.
    """

    def __init__(self, booking_id: str, reason: str) -> None:
        super().__init__(f"Malformed snapshot for booking {booking_id}: {reason}")
        self.booking_id = booking_id
        self.reason = reason

"""Booking snapshot domain model.

A booking lives in the shared change log under
``bookings/{provider_id}/{booking_id}``. Every write to that node produces a
before/after pair of raw snapshots. This module turns a raw snapshot into a
validated, immutable ``Booking`` or into ``None`` when the snapshot must be
treated as absent.

Developer Golden Rules:
1. Status codes are parsed into BookingStatus here; raw integers never
   travel further than this module
2. Present-but-empty snapshots ({} / None / "") are absent, not errors
3. A non-empty snapshot that cannot be parsed raises MalformedSnapshotError;
   it is never mistaken for an absent record
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from booking_notify.domain.errors.snapshot import MalformedSnapshotError


class BookingStatus(IntEnum):
    """Booking lifecycle status codes as stored in the change log.

    Values:
        CREATED: Booking requested by the user, awaiting the provider.
        ACCEPTED: Provider accepted the booking.
        REJECTED: Provider rejected the booking.
        USER_CANCELLED: User cancelled the booking.
        PROVIDER_CANCELLED: Provider cancelled the booking.
    """

    CREATED = 0
    ACCEPTED = 1
    REJECTED = -1
    USER_CANCELLED = -2
    PROVIDER_CANCELLED = -3

    @classmethod
    def parse(cls, raw: Any) -> BookingStatus | None:
        """Parse a raw status value, returning None if it is not a known code.

        Integers and integer strings are accepted. Booleans are rejected even
        though they are ints in Python.
        """
        if isinstance(raw, bool):
            return None
        if isinstance(raw, str):
            try:
                raw = int(raw.strip())
            except ValueError:
                return None
        if not isinstance(raw, int):
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


# Statuses produced by an action of the booking user
USER_INITIATED_STATUSES: frozenset[BookingStatus] = frozenset(
    {BookingStatus.CREATED, BookingStatus.USER_CANCELLED}
)

# Statuses produced by an action of the service provider
PROVIDER_INITIATED_STATUSES: frozenset[BookingStatus] = frozenset(
    {
        BookingStatus.ACCEPTED,
        BookingStatus.REJECTED,
        BookingStatus.PROVIDER_CANCELLED,
    }
)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True, eq=True)
class Booking:
    """Validated snapshot of one booking record.

    Attributes:
        booking_id: Opaque booking identifier, stable for the record's lifetime.
        provider_id: Identity of the provider managing the booking.
        user_id: Identity of the user who made the booking (may be unknown).
        status: Current lifecycle status.
        service_name: Name of the booked service, for human-readable text.
        user_name: Display name of the user, for human-readable text.
    """

    booking_id: str
    provider_id: str
    user_id: str | None
    status: BookingStatus
    service_name: str | None = None
    user_name: str | None = None

    @classmethod
    def from_snapshot(
        cls,
        raw: Any,
        *,
        booking_id: str,
        provider_id: str,
    ) -> Booking | None:
        """Build a Booking from a raw change-log snapshot.

        Identifiers embedded in the snapshot win over the identifiers taken
        from the change path; the path values are the fallback.

        Args:
            raw: The raw snapshot value (usually a decoded JSON object).
            booking_id: Booking identifier from the change path.
            provider_id: Provider identifier from the change path.

        Returns:
            The parsed Booking, or None when the snapshot is empty.

        Raises:
            MalformedSnapshotError: If the snapshot is present but unusable.
        """
        if not raw:
            return None

        if not isinstance(raw, Mapping):
            raise MalformedSnapshotError(
                booking_id, f"expected an object, got {type(raw).__name__}"
            )

        status = BookingStatus.parse(raw.get("status"))
        if status is None:
            raise MalformedSnapshotError(
                booking_id, f"missing or unknown status {raw.get('status')!r}"
            )

        return cls(
            booking_id=_optional_str(raw.get("bookingId")) or booking_id,
            provider_id=_optional_str(raw.get("providerId")) or provider_id,
            user_id=_optional_str(raw.get("userId")),
            status=status,
            service_name=_optional_str(raw.get("serviceName")),
            user_name=_optional_str(raw.get("userName")),
        )

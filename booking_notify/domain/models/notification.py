"""Notification domain model: recipients, payloads, decisions and outcomes.

Developer Golden Rules:
1. A payload is EITHER human-readable (title/body) OR a structured data bag
2. Decisions are data - Skip carries a reason, Notify carries a payload
3. Per-token delivery failures are outcomes, never exceptions
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

# Gateway error codes that prove a registration token is permanently invalid
INVALID_REGISTRATION_TOKEN = "messaging/invalid-registration-token"
REGISTRATION_TOKEN_NOT_REGISTERED = "messaging/registration-token-not-registered"

PERMANENTLY_INVALID_ERROR_CODES: frozenset[str] = frozenset(
    {INVALID_REGISTRATION_TOKEN, REGISTRATION_TOKEN_NOT_REGISTERED}
)


class RecipientRole(str, Enum):
    """Who is being notified; the value is the registry key for the role.

    Values:
        PANEL: Service provider staff using the management panel.
        CLIENT: The user who made the booking.
    """

    PANEL = "panel"
    CLIENT = "client"


class PayloadStyle(str, Enum):
    """Shape of the payload a policy builds.

    Values:
        NOTIFICATION: Human-readable title/body rendered by the device OS.
        DATA: Identifier-only data bag rendered by the client app itself.
    """

    NOTIFICATION = "notification"
    DATA = "data"


@dataclass(frozen=True)
class NotificationPayload:
    """Payload handed to the push gateway.

    Exactly one of the two shapes is populated. Use the ``human_readable``
    and ``structured`` constructors rather than building it directly.

    Attributes:
        title: Notification title (human-readable shape only).
        body: Notification body (human-readable shape only).
        data: String-valued data bag (structured shape only).
    """

    title: str | None = None
    body: str | None = None
    data: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        has_text = self.title is not None or self.body is not None
        if has_text and self.data:
            raise ValueError("payload cannot carry both notification text and data")
        if not has_text and not self.data:
            raise ValueError("payload must carry notification text or data")

    @classmethod
    def human_readable(cls, title: str, body: str) -> NotificationPayload:
        return cls(title=title, body=body)

    @classmethod
    def structured(cls, data: Mapping[str, Any]) -> NotificationPayload:
        # FCM data bags are string-valued
        return cls(data=MappingProxyType({k: str(v) for k, v in data.items()}))

    @property
    def style(self) -> PayloadStyle:
        if self.data:
            return PayloadStyle.DATA
        return PayloadStyle.NOTIFICATION

    def to_message(self) -> dict[str, Any]:
        """Render the gateway message members for this payload.

        Returns:
            ``{"notification": {...}}`` or ``{"data": {...}}``.
        """
        if self.style is PayloadStyle.DATA:
            return {"data": dict(self.data)}
        return {"notification": {"title": self.title or "", "body": self.body or ""}}


@dataclass(frozen=True)
class Skip:
    """Policy decision: do not notify.

    Attributes:
        reason: Short operator-facing reason, logged at the terminal point.
    """

    reason: str


@dataclass(frozen=True)
class Notify:
    """Policy decision: notify with this payload."""

    payload: NotificationPayload


Decision = Skip | Notify


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of delivering one payload to one token.

    Attributes:
        error_code: Machine-readable gateway error code; None when delivered.
        message_id: Gateway message id for delivered messages, if reported.
    """

    error_code: str | None = None
    message_id: str | None = None

    @classmethod
    def delivered(cls, message_id: str | None = None) -> DeliveryOutcome:
        return cls(message_id=message_id)

    @classmethod
    def failed(cls, error_code: str) -> DeliveryOutcome:
        return cls(error_code=error_code)

    @property
    def is_delivered(self) -> bool:
        return self.error_code is None

    @property
    def is_permanently_invalid(self) -> bool:
        """True when the gateway proved the token can never be delivered to."""
        return self.error_code in PERMANENTLY_INVALID_ERROR_CODES


@dataclass(frozen=True)
class TokenOutcome:
    """A delivery outcome paired with the token it belongs to."""

    token: str
    outcome: DeliveryOutcome

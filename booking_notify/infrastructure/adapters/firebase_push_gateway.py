"""Push gateway adapter for Firebase Cloud Messaging via the Admin SDK.

Uses ``firebase_admin.messaging.send_each_for_multicast``, which sends one
message per registration token over the FCM HTTP v1 API and answers with a
``BatchResponse`` whose ``responses[i]`` belongs to ``tokens[i]``.

Per-token exceptions are normalized to ``messaging/<code>`` strings so that
the two permanent-invalidity errors match the domain constants:

    UnregisteredError     -> messaging/registration-token-not-registered
    InvalidArgumentError  -> messaging/invalid-registration-token

The SDK call is blocking; it runs in a worker thread so the event loop
keeps serving other pipelines.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any

import firebase_admin
import structlog
from firebase_admin import exceptions, messaging

from booking_notify.application.ports.push_gateway import PushGatewayProtocol
from booking_notify.domain.errors import GatewayResponseError, GatewayTransportError
from booking_notify.domain.models.notification import (
    INVALID_REGISTRATION_TOKEN,
    REGISTRATION_TOKEN_NOT_REGISTERED,
    DeliveryOutcome,
    NotificationPayload,
    PayloadStyle,
)

log = structlog.get_logger()

# send_each_for_multicast rejects messages with more tokens than this
MAX_BATCH_SIZE = 500

# Most specific first: UnregisteredError is a NotFoundError, and so on
_ERROR_CODES: tuple[tuple[type[Exception], str], ...] = (
    (messaging.UnregisteredError, REGISTRATION_TOKEN_NOT_REGISTERED),
    (exceptions.InvalidArgumentError, INVALID_REGISTRATION_TOKEN),
    (messaging.SenderIdMismatchError, "messaging/mismatched-credential"),
    (messaging.QuotaExceededError, "messaging/message-rate-exceeded"),
    (messaging.ThirdPartyAuthError, "messaging/third-party-auth-error"),
    (exceptions.UnavailableError, "messaging/server-unavailable"),
    (exceptions.InternalError, "messaging/internal-error"),
)

SendMulticast = Callable[..., messaging.BatchResponse]


def normalize_error(error: BaseException | None) -> str:
    """Map a per-token SDK exception to a ``messaging/...`` code.

    Args:
        error: The exception attached to a failed ``SendResponse``.

    Returns:
        The normalized error code.
    """
    for error_type, code in _ERROR_CODES:
        if isinstance(error, error_type):
            return code
    if isinstance(error, exceptions.FirebaseError):
        return "messaging/" + str(error.code).lower().replace("_", "-")
    return "messaging/unknown-error"


def build_message(
    tokens: list[str], payload: NotificationPayload
) -> messaging.MulticastMessage:
    """Build the multicast message for one chunk of tokens."""
    if payload.style is PayloadStyle.DATA:
        return messaging.MulticastMessage(tokens=tokens, data=dict(payload.data))
    return messaging.MulticastMessage(
        tokens=tokens,
        notification=messaging.Notification(title=payload.title, body=payload.body),
    )


def _outcome_from_response(response: Any) -> DeliveryOutcome:
    if response.success:
        return DeliveryOutcome.delivered(message_id=response.message_id)
    return DeliveryOutcome.failed(normalize_error(response.exception))


class FirebasePushGateway(PushGatewayProtocol):
    """Batch push delivery through the Firebase Admin SDK.

    Target sets larger than MAX_BATCH_SIZE are sent as consecutive chunks
    and their outcomes concatenated, so outcome order always matches the
    submitted token order.
    """

    def __init__(
        self,
        app: firebase_admin.App | None = None,
        send_multicast: SendMulticast = messaging.send_each_for_multicast,
    ) -> None:
        """Initialize the gateway.

        Args:
            app: Firebase app holding the service-account credentials.
                None uses the SDK's default app.
            send_multicast: Multicast send function (injectable for tests).
        """
        self._app = app
        self._send_multicast = send_multicast

    async def send_batch(
        self, tokens: Sequence[str], payload: NotificationPayload
    ) -> list[DeliveryOutcome]:
        outcomes: list[DeliveryOutcome] = []
        for start in range(0, len(tokens), MAX_BATCH_SIZE):
            chunk = list(tokens[start : start + MAX_BATCH_SIZE])
            outcomes.extend(await self._send_chunk(chunk, payload))
        return outcomes

    async def _send_chunk(
        self, tokens: list[str], payload: NotificationPayload
    ) -> list[DeliveryOutcome]:
        message = build_message(tokens, payload)
        try:
            batch = await asyncio.to_thread(
                self._send_multicast, message, app=self._app
            )
        except exceptions.FirebaseError as e:
            raise GatewayTransportError(
                f"Push gateway request failed: {e}", operation="send_batch"
            ) from e

        responses = list(batch.responses)
        if len(responses) != len(tokens):
            raise GatewayResponseError(
                f"Push gateway returned {len(responses)} results for {len(tokens)} tokens",
                expected=len(tokens),
                received=len(responses),
            )

        log.debug(
            "fcm_batch_sent",
            token_count=len(tokens),
            failure_count=batch.failure_count,
        )
        return [_outcome_from_response(response) for response in responses]

"""Push gateway protocol.

Application port for the external push delivery gateway. A single call
delivers one payload to a batch of device tokens and reports one outcome
per token, in the order the tokens were submitted.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from booking_notify.domain.models.notification import (
    DeliveryOutcome,
    NotificationPayload,
)


class PushGatewayProtocol(Protocol):
    """Protocol for batched push delivery."""

    async def send_batch(
        self, tokens: Sequence[str], payload: NotificationPayload
    ) -> list[DeliveryOutcome]:
        """Deliver a payload to every token in one batch.

        Args:
            tokens: Ordered device tokens.
            payload: Payload to deliver.

        Returns:
            One outcome per token, positionally aligned with ``tokens``.

        Raises:
            GatewayTransportError: If the batch call fails as a whole.
        """
        ...

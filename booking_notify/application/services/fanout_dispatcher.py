"""Fan-out dispatch service.

Sends one payload to a whole target set in a single gateway batch and pairs
each returned outcome with the token it belongs to.

Developer Golden Rules:
1. ONE batch call per dispatch - never one call per token
2. Outcomes are positional - result i belongs to token i
3. Per-token failures are logged and returned, never raised
"""

from __future__ import annotations

from collections.abc import Iterable

from structlog import get_logger

from booking_notify.application.ports.push_gateway import PushGatewayProtocol
from booking_notify.domain.errors import GatewayResponseError
from booking_notify.domain.models.notification import (
    NotificationPayload,
    TokenOutcome,
)

logger = get_logger()


class FanoutDispatcher:
    """Deliver a payload to many tokens through the push gateway."""

    def __init__(self, gateway: PushGatewayProtocol) -> None:
        """Initialize the dispatcher.

        Args:
            gateway: Push gateway used for batch delivery.
        """
        self._gateway = gateway

    async def dispatch(
        self, targets: Iterable[str], payload: NotificationPayload
    ) -> list[TokenOutcome]:
        """Send the payload to every target.

        Targets are sent in sorted order so the batch is deterministic for a
        given target set.

        Args:
            targets: Delivery tokens.
            payload: Payload to deliver.

        Returns:
            One TokenOutcome per target, in submission order.

        Raises:
            GatewayTransportError: If the batch call fails as a whole.
            GatewayResponseError: If the gateway returns the wrong number of outcomes.
        """
        tokens = sorted(targets)
        outcomes = await self._gateway.send_batch(tokens, payload)

        if len(outcomes) != len(tokens):
            raise GatewayResponseError(
                f"Gateway returned {len(outcomes)} outcomes for {len(tokens)} tokens",
                expected=len(tokens),
                received=len(outcomes),
            )

        results = [
            TokenOutcome(token=token, outcome=outcome)
            for token, outcome in zip(tokens, outcomes)
        ]

        failures = 0
        for result in results:
            if not result.outcome.is_delivered:
                failures += 1
                logger.warning(
                    "delivery_failed",
                    token=result.token,
                    error_code=result.outcome.error_code,
                )

        logger.info(
            "dispatch_summary",
            payload_style=payload.style.value,
            target_count=len(tokens),
            success_count=len(tokens) - failures,
            failure_count=failures,
        )
        return results

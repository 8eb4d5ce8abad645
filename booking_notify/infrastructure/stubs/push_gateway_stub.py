"""Push gateway stub for development and testing.

Records every batch it receives and answers with per-token outcomes taken
from a configurable error map. Tokens without an entry are delivered.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from uuid import uuid4

from structlog import get_logger

from booking_notify.application.ports.push_gateway import PushGatewayProtocol
from booking_notify.domain.errors import GatewayTransportError
from booking_notify.domain.models.notification import (
    DeliveryOutcome,
    NotificationPayload,
)

logger = get_logger()


@dataclass
class SentBatch:
    """Record of one gateway call (for stub tracking)."""

    tokens: list[str]
    payload: NotificationPayload


@dataclass
class PushGatewayStub(PushGatewayProtocol):
    """In-memory push gateway.

    Attributes:
        batches: Every batch received, in call order.
        token_errors: Error code to report per token.
        fail_transport: When True, send_batch raises GatewayTransportError.
        delay_seconds: Simulated network latency per call.
        max_in_flight: Highest number of concurrently running calls observed.
    """

    batches: list[SentBatch] = field(default_factory=list)
    token_errors: dict[str, str] = field(default_factory=dict)
    fail_transport: bool = False
    delay_seconds: float = 0.0
    max_in_flight: int = 0
    _in_flight: int = field(default=0, init=False, repr=False)

    @property
    def call_count(self) -> int:
        return len(self.batches)

    async def send_batch(
        self, tokens: Sequence[str], payload: NotificationPayload
    ) -> list[DeliveryOutcome]:
        self.batches.append(SentBatch(tokens=list(tokens), payload=payload))
        if self.fail_transport:
            raise GatewayTransportError(
                "Simulated gateway failure", operation="send_batch", status_code=503
            )

        self._in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self._in_flight)
        try:
            if self.delay_seconds > 0:
                await asyncio.sleep(self.delay_seconds)
        finally:
            self._in_flight -= 1

        outcomes = []
        for token in tokens:
            error_code = self.token_errors.get(token)
            if error_code is None:
                outcomes.append(
                    DeliveryOutcome.delivered(message_id=f"stub-{uuid4().hex[:12]}")
                )
            else:
                outcomes.append(DeliveryOutcome.failed(error_code))

        logger.debug("stub_batch_sent", token_count=len(tokens))
        return outcomes

    def reset(self) -> None:
        """Clear recorded batches and failure modes."""
        self.batches.clear()
        self.token_errors.clear()
        self.fail_transport = False
        self.delay_seconds = 0.0
        self.max_in_flight = 0
        self._in_flight = 0

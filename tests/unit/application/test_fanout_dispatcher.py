"""Unit tests for FanoutDispatcher."""

from unittest.mock import AsyncMock

import pytest

from booking_notify.application.services.fanout_dispatcher import FanoutDispatcher
from booking_notify.domain.errors import GatewayResponseError, GatewayTransportError
from booking_notify.domain.models.notification import (
    INVALID_REGISTRATION_TOKEN,
    DeliveryOutcome,
    NotificationPayload,
)
from booking_notify.infrastructure.stubs.push_gateway_stub import PushGatewayStub


@pytest.fixture
def payload() -> NotificationPayload:
    return NotificationPayload.human_readable("You have a new booking!", "Haircut from Alice.")


class TestFanoutDispatcher:
    """Tests for FanoutDispatcher.dispatch."""

    @pytest.mark.asyncio
    async def test_sends_one_batch_for_all_targets(
        self, gateway: PushGatewayStub, payload: NotificationPayload
    ) -> None:
        await FanoutDispatcher(gateway).dispatch({"T3", "T1", "T2"}, payload)

        assert gateway.call_count == 1
        assert gateway.batches[0].tokens == ["T1", "T2", "T3"]
        assert gateway.batches[0].payload == payload

    @pytest.mark.asyncio
    async def test_pairs_outcomes_with_tokens_by_position(
        self, gateway: PushGatewayStub, payload: NotificationPayload
    ) -> None:
        gateway.token_errors["B"] = INVALID_REGISTRATION_TOKEN

        results = await FanoutDispatcher(gateway).dispatch(["C", "A", "B"], payload)

        assert [r.token for r in results] == ["A", "B", "C"]
        assert [r.outcome.is_delivered for r in results] == [True, False, True]
        assert results[1].outcome.error_code == INVALID_REGISTRATION_TOKEN

    @pytest.mark.asyncio
    async def test_per_token_failures_do_not_raise(
        self, gateway: PushGatewayStub, payload: NotificationPayload
    ) -> None:
        gateway.token_errors.update(
            {"T1": "messaging/server-unavailable", "T2": "messaging/internal-error"}
        )

        results = await FanoutDispatcher(gateway).dispatch(["T1", "T2"], payload)

        assert all(not r.outcome.is_delivered for r in results)

    @pytest.mark.asyncio
    async def test_outcome_count_mismatch_raises(
        self, payload: NotificationPayload
    ) -> None:
        gateway = AsyncMock()
        gateway.send_batch.return_value = [DeliveryOutcome.delivered()]

        with pytest.raises(GatewayResponseError) as exc_info:
            await FanoutDispatcher(gateway).dispatch(["T1", "T2"], payload)

        assert exc_info.value.expected == 2
        assert exc_info.value.received == 1

    @pytest.mark.asyncio
    async def test_transport_failure_propagates(
        self, gateway: PushGatewayStub, payload: NotificationPayload
    ) -> None:
        gateway.fail_transport = True

        with pytest.raises(GatewayTransportError):
            await FanoutDispatcher(gateway).dispatch(["T1"], payload)

"""Unit tests for the trigger and health routes."""

import pytest
from fastapi.testclient import TestClient

from booking_notify.api.main import create_app
from booking_notify.bootstrap.notifier import Notifier
from booking_notify.domain.models.notification import RecipientRole
from booking_notify.infrastructure.stubs.push_gateway_stub import PushGatewayStub
from booking_notify.infrastructure.stubs.token_registry_stub import TokenRegistryStub

TRIGGER_URL = "/v1/triggers/bookings/P1/B1"


@pytest.fixture
def client(notifier: Notifier) -> TestClient:
    return TestClient(create_app(notifier=notifier))


class TestHealth:
    """Tests for GET /v1/health."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestBookingTrigger:
    """Tests for POST /v1/triggers/bookings/{provider_id}/{booking_id}."""

    def test_new_booking_notifies_provider(
        self,
        client: TestClient,
        registry: TokenRegistryStub,
        gateway: PushGatewayStub,
        make_snapshot,
    ) -> None:
        registry.register_token(RecipientRole.PANEL, "P1", "T1")

        response = client.post(TRIGGER_URL, json={"before": None, "after": make_snapshot(0)})

        assert response.status_code == 200
        body = response.json()
        assert body["booking_id"] == "B1"
        panel, user = body["results"]
        assert panel == {
            "role": "panel",
            "recipient_id": "P1",
            "state": "done",
            "reason": None,
            "dispatched": 1,
            "delivered": 1,
            "removed_tokens": [],
        }
        assert user["state"] == "done_no_op"
        assert user["reason"] == "changed by user"
        assert gateway.call_count == 1

    def test_deletion_is_a_successful_no_op(
        self, client: TestClient, gateway: PushGatewayStub, make_snapshot
    ) -> None:
        response = client.post(TRIGGER_URL, json={"before": make_snapshot(1)})

        assert response.status_code == 200
        assert {r["reason"] for r in response.json()["results"]} == {"booking deleted"}
        assert gateway.call_count == 0

    def test_registry_failure_is_bad_gateway(
        self, client: TestClient, registry: TokenRegistryStub, make_snapshot
    ) -> None:
        registry.fail_reads = True

        response = client.post(TRIGGER_URL, json={"after": make_snapshot(0)})

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["type"] == "urn:booking-notify:error:registry-unavailable"
        assert detail["status"] == 502

    def test_gateway_failure_is_bad_gateway(
        self,
        client: TestClient,
        registry: TokenRegistryStub,
        gateway: PushGatewayStub,
        make_snapshot,
    ) -> None:
        registry.register_token(RecipientRole.PANEL, "P1", "T1")
        gateway.fail_transport = True

        response = client.post(TRIGGER_URL, json={"after": make_snapshot(0)})

        assert response.status_code == 502
        assert (
            response.json()["detail"]["type"]
            == "urn:booking-notify:error:gateway-unavailable"
        )

    def test_correlation_id_is_echoed(self, client: TestClient, make_snapshot) -> None:
        response = client.post(
            TRIGGER_URL,
            json={"before": make_snapshot(0), "after": make_snapshot(0)},
            headers={"X-Correlation-ID": "feed-delivery-7"},
        )

        assert response.headers["X-Correlation-ID"] == "feed-delivery-7"


class TestNotReady:
    """Routes without a notifier answer 503."""

    def test_missing_notifier(self) -> None:
        client = TestClient(create_app())

        response = client.post(TRIGGER_URL, json={})

        assert response.status_code == 503
        assert response.json()["detail"]["type"] == "urn:booking-notify:error:not-ready"

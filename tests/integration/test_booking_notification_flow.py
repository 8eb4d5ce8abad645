"""Integration tests for the booking notification flow.

Runs whole booking lifecycles through the bootstrap-wired notifier with the
in-memory registry and gateway.
"""

import pytest

from booking_notify.bootstrap.notifier import (
    Notifier,
    create_notifier,
    initialize_firebase_app,
)
from booking_notify.config.notifier_config import TEST_NOTIFIER_CONFIG, NotifierConfig
from booking_notify.domain.errors import ConfigurationError
from booking_notify.domain.models.notification import (
    INVALID_REGISTRATION_TOKEN,
    PayloadStyle,
    RecipientRole,
)
from booking_notify.infrastructure.adapters.firebase_push_gateway import (
    FirebasePushGateway,
)
from booking_notify.infrastructure.stubs.push_gateway_stub import PushGatewayStub
from booking_notify.infrastructure.stubs.token_registry_stub import TokenRegistryStub

pytestmark = pytest.mark.integration


class TestNewBooking:
    """A user books a haircut with provider P1."""

    @pytest.mark.asyncio
    async def test_provider_gets_one_notification(
        self,
        notifier: Notifier,
        registry: TokenRegistryStub,
        gateway: PushGatewayStub,
    ) -> None:
        registry.register_token(RecipientRole.PANEL, "P1", "T1")

        result = await notifier.trigger_service.handle_write(
            "P1",
            "B1",
            None,
            {"status": 0, "userId": "U1", "serviceName": "Haircut", "userName": "Alice"},
        )

        assert result.notified_count == 1
        assert gateway.call_count == 1
        batch = gateway.batches[0]
        assert batch.tokens == ["T1"]
        assert batch.payload.style is PayloadStyle.NOTIFICATION
        assert batch.payload.title == "You have a new booking!"
        assert batch.payload.body == "Haircut from Alice."
        assert registry.delete_calls == []


class TestBookingLifecycle:
    """A booking moves through several writes."""

    @pytest.mark.asyncio
    async def test_each_write_notifies_the_other_party(
        self,
        notifier: Notifier,
        registry: TokenRegistryStub,
        gateway: PushGatewayStub,
        make_snapshot,
    ) -> None:
        registry.register_token(RecipientRole.PANEL, "P1", "PANEL-T")
        registry.register_token(RecipientRole.CLIENT, "U1", "CLIENT-T")
        service = notifier.trigger_service

        await service.handle_write("P1", "B1", None, make_snapshot(0))
        await service.handle_write("P1", "B1", make_snapshot(0), make_snapshot(1))
        await service.handle_write("P1", "B1", make_snapshot(1), make_snapshot(1))
        await service.handle_write("P1", "B1", make_snapshot(1), make_snapshot(-2))
        await service.handle_write("P1", "B1", make_snapshot(-2), None)

        assert [batch.tokens for batch in gateway.batches] == [
            ["PANEL-T"],
            ["CLIENT-T"],
            ["PANEL-T"],
        ]

    @pytest.mark.asyncio
    async def test_stale_token_is_pruned_once(
        self,
        notifier: Notifier,
        registry: TokenRegistryStub,
        gateway: PushGatewayStub,
        make_snapshot,
    ) -> None:
        for token in ("A", "B", "C"):
            registry.register_token(RecipientRole.CLIENT, "U1", token)
        gateway.token_errors["B"] = INVALID_REGISTRATION_TOKEN

        first = await notifier.trigger_service.handle_write(
            "P1", "B1", make_snapshot(0), make_snapshot(1)
        )
        second = await notifier.trigger_service.handle_write(
            "P1", "B2", make_snapshot(0), make_snapshot(-1)
        )

        assert first.results[1].removed_tokens == ("B",)
        assert second.results[1].removed_tokens == ()
        assert gateway.batches[1].tokens == ["A", "C"]
        assert registry.tokens_for(RecipientRole.CLIENT, "U1") == {"A", "C"}


class TestCreateNotifier:
    """Tests for bootstrap adapter selection."""

    def test_stub_config_needs_no_http_client(self) -> None:
        notifier = create_notifier(TEST_NOTIFIER_CONFIG)

        assert isinstance(notifier.registry, TokenRegistryStub)
        assert isinstance(notifier.gateway, PushGatewayStub)

    def test_real_adapter_requires_http_client(self) -> None:
        config = NotifierConfig(registry_url="https://db.example.test")

        with pytest.raises(ConfigurationError) as exc_info:
            create_notifier(config)

        assert exc_info.value.setting == "http_client"

    def test_firebase_credentials_require_firebase_app(self) -> None:
        config = NotifierConfig(firebase_credentials="/etc/notifier/service-account.json")

        with pytest.raises(ConfigurationError) as exc_info:
            create_notifier(config)

        assert exc_info.value.setting == "firebase_app"

    def test_firebase_app_selects_firebase_gateway(self) -> None:
        config = NotifierConfig(firebase_credentials="/etc/notifier/service-account.json")

        notifier = create_notifier(config, firebase_app=object())  # type: ignore[arg-type]

        assert isinstance(notifier.gateway, FirebasePushGateway)
        assert isinstance(notifier.registry, TokenRegistryStub)

    def test_unreadable_credentials_are_a_configuration_error(self, tmp_path) -> None:
        config = NotifierConfig(firebase_credentials=str(tmp_path / "missing.json"))

        with pytest.raises(ConfigurationError) as exc_info:
            initialize_firebase_app(config)

        assert exc_info.value.setting == "firebase_credentials"

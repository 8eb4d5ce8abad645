"""Unit tests for TokenRegistryStub."""

import pytest

from booking_notify.domain.errors import RegistryTransportError
from booking_notify.domain.models.notification import RecipientRole
from booking_notify.infrastructure.stubs.token_registry_stub import TokenRegistryStub


class TestTokenRegistryStub:
    """Tests for TokenRegistryStub."""

    @pytest.mark.asyncio
    async def test_get_returns_copy(self, registry: TokenRegistryStub) -> None:
        registry.register_token(RecipientRole.PANEL, "P1", "T1")

        tokens = await registry.get_tokens(RecipientRole.PANEL, "P1")
        tokens["T2"] = True  # type: ignore[index]

        assert registry.tokens_for(RecipientRole.PANEL, "P1") == {"T1"}

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, registry: TokenRegistryStub) -> None:
        registry.register_token(RecipientRole.CLIENT, "U1", "T1")
        registry.register_token(RecipientRole.CLIENT, "U1", "T2")

        await registry.delete_token(RecipientRole.CLIENT, "U1", "T1")
        await registry.delete_token(RecipientRole.CLIENT, "U1", "T1")

        assert registry.tokens_for(RecipientRole.CLIENT, "U1") == {"T2"}
        assert len(registry.delete_calls) == 2

    @pytest.mark.asyncio
    async def test_delete_on_unknown_recipient_succeeds(
        self, registry: TokenRegistryStub
    ) -> None:
        await registry.delete_token(RecipientRole.PANEL, "nobody", "T1")

        assert registry.tokens == {}

    @pytest.mark.asyncio
    async def test_failure_modes(self, registry: TokenRegistryStub) -> None:
        registry.fail_reads = True
        registry.fail_deletes.add("T1")

        with pytest.raises(RegistryTransportError):
            await registry.get_tokens(RecipientRole.PANEL, "P1")
        with pytest.raises(RegistryTransportError):
            await registry.delete_token(RecipientRole.PANEL, "P1", "T1")

    @pytest.mark.asyncio
    async def test_reset(self, registry: TokenRegistryStub) -> None:
        registry.register_token(RecipientRole.PANEL, "P1", "T1")
        registry.fail_reads = True
        registry.reset()

        assert await registry.get_tokens(RecipientRole.PANEL, "P1") == {}
        assert registry.get_calls == [(RecipientRole.PANEL, "P1")]

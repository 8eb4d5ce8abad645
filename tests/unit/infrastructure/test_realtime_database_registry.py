"""Unit tests for RealtimeDatabaseTokenRegistry over a mocked transport."""

import httpx
import pytest

from booking_notify.domain.errors import RegistryTransportError
from booking_notify.domain.models.notification import RecipientRole
from booking_notify.infrastructure.adapters.realtime_database_registry import (
    RealtimeDatabaseTokenRegistry,
)

BASE_URL = "https://bookings.example.test"


def _registry(handler, auth_token: str | None = "secret") -> RealtimeDatabaseTokenRegistry:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RealtimeDatabaseTokenRegistry(client, base_url=BASE_URL + "/", auth_token=auth_token)


class TestNodeUrl:
    """Tests for URL construction."""

    def test_segments_are_percent_encoded(self) -> None:
        registry = _registry(lambda request: httpx.Response(200))

        url = registry.node_url("panel", "P1", "tok:en/with.chars")

        assert url == (
            f"{BASE_URL}/notificationTokens/panel/P1/tok%3Aen%2Fwith.chars.json"
        )


class TestGetTokens:
    """Tests for get_tokens."""

    @pytest.mark.asyncio
    async def test_reads_role_branch(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"T1": True, "T2": {"platform": "ios"}})

        tokens = await _registry(handler).get_tokens(RecipientRole.PANEL, "P1")

        assert set(tokens) == {"T1", "T2"}
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/notificationTokens/panel/P1.json"
        assert seen[0].url.params["auth"] == "secret"

    @pytest.mark.asyncio
    async def test_null_node_is_empty(self) -> None:
        registry = _registry(lambda request: httpx.Response(200, json=None))

        assert await registry.get_tokens(RecipientRole.CLIENT, "U1") == {}

    @pytest.mark.asyncio
    async def test_no_auth_parameter_without_credential(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=None)

        await _registry(handler, auth_token=None).get_tokens(RecipientRole.CLIENT, "U1")

        assert "auth" not in seen[0].url.params

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        registry = _registry(lambda request: httpx.Response(401, json={"error": "denied"}))

        with pytest.raises(RegistryTransportError) as exc_info:
            await registry.get_tokens(RecipientRole.PANEL, "P1")

        assert exc_info.value.status_code == 401
        assert exc_info.value.operation == "get_tokens"

    @pytest.mark.asyncio
    async def test_non_object_body_raises(self) -> None:
        registry = _registry(lambda request: httpx.Response(200, json=["T1"]))

        with pytest.raises(RegistryTransportError, match="expected object"):
            await registry.get_tokens(RecipientRole.PANEL, "P1")

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self) -> None:
        registry = _registry(lambda request: httpx.Response(200, content=b"<html>"))

        with pytest.raises(RegistryTransportError, match="invalid JSON"):
            await registry.get_tokens(RecipientRole.PANEL, "P1")

    @pytest.mark.asyncio
    async def test_connection_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RegistryTransportError, match="read failed"):
            await _registry(handler).get_tokens(RecipientRole.PANEL, "P1")


class TestDeleteToken:
    """Tests for delete_token."""

    @pytest.mark.asyncio
    async def test_deletes_token_node(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=None)

        await _registry(handler).delete_token(RecipientRole.CLIENT, "U1", "T1")

        assert seen[0].method == "DELETE"
        assert seen[0].url.path == "/notificationTokens/client/U1/T1.json"

    @pytest.mark.asyncio
    async def test_missing_node_is_success(self) -> None:
        registry = _registry(lambda request: httpx.Response(404))

        await registry.delete_token(RecipientRole.CLIENT, "U1", "T1")

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        registry = _registry(lambda request: httpx.Response(500))

        with pytest.raises(RegistryTransportError) as exc_info:
            await registry.delete_token(RecipientRole.CLIENT, "U1", "T1")

        assert exc_info.value.operation == "delete_token"

"""
Pytest configuration and shared fixtures for booking notifier tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use the in-memory stubs for collaborators, AsyncMock for one-off fakes
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from typing import Any

import pytest

from booking_notify.bootstrap.notifier import Notifier, build_notifier
from booking_notify.config.notifier_config import TEST_NOTIFIER_CONFIG
from booking_notify.infrastructure.stubs.push_gateway_stub import PushGatewayStub
from booking_notify.infrastructure.stubs.token_registry_stub import TokenRegistryStub


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from booking_notify import __version__

    return __version__


@pytest.fixture
def registry() -> TokenRegistryStub:
    """Provide an empty token registry stub."""
    return TokenRegistryStub()


@pytest.fixture
def gateway() -> PushGatewayStub:
    """Provide a push gateway stub that delivers everything."""
    return PushGatewayStub()


@pytest.fixture
def notifier(registry: TokenRegistryStub, gateway: PushGatewayStub) -> Notifier:
    """Provide a notifier wired to the stub collaborators."""
    return build_notifier(TEST_NOTIFIER_CONFIG, registry, gateway)


@pytest.fixture
def make_snapshot():
    """Build raw booking snapshots as they appear in the change log."""

    def _make(status: Any, **overrides: Any) -> dict[str, Any]:
        snapshot: dict[str, Any] = {
            "status": status,
            "userId": "U1",
            "serviceName": "Haircut",
            "userName": "Alice",
        }
        snapshot.update(overrides)
        return snapshot

    return _make

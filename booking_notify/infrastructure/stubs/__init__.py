"""Infrastructure stubs for development and testing.

Available stubs:
- TokenRegistryStub: In-memory token tree with call recording and failure modes
- PushGatewayStub: Records batches, returns configurable per-token outcomes

WARNING: These stubs are NOT for production use.
Production implementations are in booking_notify/infrastructure/adapters/.
"""

from booking_notify.infrastructure.stubs.push_gateway_stub import (
    PushGatewayStub,
    SentBatch,
)
from booking_notify.infrastructure.stubs.token_registry_stub import TokenRegistryStub

__all__: list[str] = ["PushGatewayStub", "SentBatch", "TokenRegistryStub"]

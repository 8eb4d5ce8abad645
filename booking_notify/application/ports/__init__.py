"""Application ports - interfaces for the notifier's external collaborators.

Available ports:
- TokenRegistryProtocol: Read and delete device notification tokens
- PushGatewayProtocol: Batched push delivery with per-token outcomes
"""

from booking_notify.application.ports.push_gateway import PushGatewayProtocol
from booking_notify.application.ports.token_registry import TokenRegistryProtocol

__all__: list[str] = ["PushGatewayProtocol", "TokenRegistryProtocol"]

"""Domain errors for the booking notifier.

All exceptions inherit from NotifierError.
"""

from booking_notify.domain.errors.configuration import ConfigurationError
from booking_notify.domain.errors.snapshot import MalformedSnapshotError
from booking_notify.domain.errors.transport import (
    GatewayResponseError,
    GatewayTransportError,
    RegistryTransportError,
    TransportError,
)
from booking_notify.domain.exceptions import NotifierError

__all__: list[str] = [
    "ConfigurationError",
    "GatewayResponseError",
    "GatewayTransportError",
    "MalformedSnapshotError",
    "NotifierError",
    "RegistryTransportError",
    "TransportError",
]

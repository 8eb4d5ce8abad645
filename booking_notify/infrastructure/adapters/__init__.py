"""Production adapters for the notifier's external collaborators.

Available adapters:
- RealtimeDatabaseTokenRegistry: Token registry over realtime-database REST
- FirebasePushGateway: Batched push delivery through the Firebase Admin SDK
"""

from booking_notify.infrastructure.adapters.firebase_push_gateway import (
    MAX_BATCH_SIZE,
    FirebasePushGateway,
    normalize_error,
)
from booking_notify.infrastructure.adapters.realtime_database_registry import (
    RealtimeDatabaseTokenRegistry,
)

__all__: list[str] = [
    "MAX_BATCH_SIZE",
    "FirebasePushGateway",
    "RealtimeDatabaseTokenRegistry",
    "normalize_error",
]

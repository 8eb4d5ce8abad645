"""Application services for the notification pipeline."""

from booking_notify.application.services.booking_trigger_service import (
    BookingTriggerService,
    TriggerResult,
)
from booking_notify.application.services.fanout_dispatcher import FanoutDispatcher
from booking_notify.application.services.notification_pipeline import (
    NotificationPipeline,
    PipelineResult,
    PipelineState,
)
from booking_notify.application.services.registry_reconciler import (
    RegistryReconciler,
    tokens_to_remove,
)
from booking_notify.application.services.target_resolver import TargetResolver

__all__: list[str] = [
    "BookingTriggerService",
    "FanoutDispatcher",
    "NotificationPipeline",
    "PipelineResult",
    "PipelineState",
    "RegistryReconciler",
    "TargetResolver",
    "TriggerResult",
    "tokens_to_remove",
]

"""Booking trigger service - entry point for one inbound booking write.

A single write to ``bookings/{provider_id}/{booking_id}`` concerns both
parties, so the service runs the provider-facing and user-facing pipelines
concurrently in one task group for the same event. The two pipelines share
nothing but the external registry.

A transport failure in one pipeline cancels its sibling and propagates to
the caller as the plain exception, not an ExceptionGroup; the change-feed
runtime that invoked the trigger decides whether to redeliver the write.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from structlog import get_logger

from booking_notify.application.services.notification_pipeline import (
    NotificationPipeline,
    PipelineResult,
)
from booking_notify.domain.models.change_event import BookingChangeEvent

logger = get_logger()


@dataclass(frozen=True)
class TriggerResult:
    """Results of every role pipeline run for one booking write."""

    booking_id: str
    results: tuple[PipelineResult, ...]

    @property
    def notified_count(self) -> int:
        return sum(1 for result in self.results if result.notified)


class BookingTriggerService:
    """Fan one booking write out to every role pipeline."""

    def __init__(self, pipelines: Sequence[NotificationPipeline]) -> None:
        """Initialize the service.

        Args:
            pipelines: One pipeline per recipient role.
        """
        if not pipelines:
            raise ValueError("at least one pipeline is required")
        self._pipelines = tuple(pipelines)

    async def handle_change(self, event: BookingChangeEvent) -> TriggerResult:
        """Run every role pipeline for a parsed change event.

        Args:
            event: The parsed change event.

        Returns:
            The per-role results, in pipeline order.

        Raises:
            Exception: The first failure of any pipeline, after the others
                have been cancelled.
        """
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [
                    tg.create_task(pipeline.run(event)) for pipeline in self._pipelines
                ]
        except ExceptionGroup as group:
            first, *others = group.exceptions
            for other in others:
                logger.error(
                    "role_pipeline_failed",
                    booking_id=event.booking_id,
                    error=str(other),
                    error_type=type(other).__name__,
                )
            raise first

        results = tuple(task.result() for task in tasks)
        trigger_result = TriggerResult(booking_id=event.booking_id, results=results)
        logger.info(
            "booking_change_processed",
            booking_id=event.booking_id,
            provider_id=event.provider_id,
            notified_count=trigger_result.notified_count,
        )
        return trigger_result

    async def handle_write(
        self,
        provider_id: str,
        booking_id: str,
        before: Any,
        after: Any,
    ) -> TriggerResult:
        """Parse a raw before/after pair and process it.

        Args:
            provider_id: Provider identity from the change path.
            booking_id: Booking identity from the change path.
            before: Raw snapshot before the write (None on creation).
            after: Raw snapshot after the write (None on deletion).

        Returns:
            The per-role results, in pipeline order.
        """
        event = BookingChangeEvent.from_raw(provider_id, booking_id, before, after)
        return await self.handle_change(event)

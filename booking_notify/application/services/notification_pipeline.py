"""Notification pipeline: the per-role orchestrator for one booking write.

Runs the linear sequence

    START -> CLASSIFIED -> POLICY_EVALUATED -> TARGETS_RESOLVED
          -> DISPATCHED -> RECONCILED -> DONE

with an early exit to DONE_NO_OP when a snapshot was malformed, when the
booking was deleted or its status did not change, when the policy skips,
or when the recipient has no registered targets. Each early exit is logged
with its reason and returned as a result; none of them raise.

Developer Golden Rules:
1. No state survives between runs - every run works only from its event
2. No retries - transport failures propagate to the caller
3. Every terminal decision produces exactly one log entry
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from structlog import get_logger
from structlog.contextvars import bound_contextvars

from booking_notify.application.services.fanout_dispatcher import FanoutDispatcher
from booking_notify.application.services.registry_reconciler import (
    RegistryReconciler,
)
from booking_notify.application.services.target_resolver import TargetResolver
from booking_notify.domain.models.change_event import BookingChangeEvent
from booking_notify.domain.models.notification import RecipientRole, Skip
from booking_notify.domain.models.transition import TransitionKind
from booking_notify.domain.services.change_classifier import classify_event
from booking_notify.domain.services.notification_policy import NotificationPolicy

logger = get_logger()

REASON_NO_RECIPIENT = "no recipient"
REASON_NO_TARGETS = "no targets"


class PipelineState(str, Enum):
    """States of one pipeline run."""

    START = "start"
    CLASSIFIED = "classified"
    POLICY_EVALUATED = "policy_evaluated"
    TARGETS_RESOLVED = "targets_resolved"
    DISPATCHED = "dispatched"
    RECONCILED = "reconciled"
    DONE = "done"
    DONE_NO_OP = "done_no_op"


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of one pipeline run.

    Attributes:
        role: Recipient role the run decided for.
        recipient_id: Recipient identity (None when the booking names none).
        state: Terminal state, DONE or DONE_NO_OP.
        reason: Why the run ended early (None for DONE).
        dispatched: Number of tokens the payload was sent to.
        delivered: Number of tokens the gateway reported as delivered.
        removed_tokens: Tokens removed from the registry.
    """

    role: RecipientRole
    recipient_id: str | None
    state: PipelineState
    reason: str | None = None
    dispatched: int = 0
    delivered: int = 0
    removed_tokens: tuple[str, ...] = field(default_factory=tuple)

    @property
    def notified(self) -> bool:
        return self.state is PipelineState.DONE


class NotificationPipeline:
    """Orchestrates classification, policy, resolution, fan-out and cleanup.

    One instance serves one recipient role and may run any number of events
    concurrently; it keeps no per-event state on the instance.
    """

    def __init__(
        self,
        policy: NotificationPolicy,
        resolver: TargetResolver,
        dispatcher: FanoutDispatcher,
        reconciler: RegistryReconciler,
    ) -> None:
        """Initialize the pipeline.

        Args:
            policy: Decision policy for this pipeline's recipient role.
            resolver: Delivery target resolver.
            dispatcher: Batched fan-out dispatcher.
            reconciler: Registry reconciler for invalid tokens.
        """
        self._policy = policy
        self._resolver = resolver
        self._dispatcher = dispatcher
        self._reconciler = reconciler

    @property
    def role(self) -> RecipientRole:
        return self._policy.role

    def recipient_for(self, event: BookingChangeEvent) -> str | None:
        """Recipient identity for this pipeline's role."""
        if self.role is RecipientRole.PANEL:
            return event.provider_id
        return event.user_id

    async def run(self, event: BookingChangeEvent) -> PipelineResult:
        """Process one booking write for this pipeline's role.

        Args:
            event: The parsed change event.

        Returns:
            The terminal result of the run.

        Raises:
            RegistryTransportError: If reading targets fails.
            GatewayTransportError: If the batch send fails.
        """
        recipient_id = self.recipient_for(event)
        with bound_contextvars(
            booking_id=event.booking_id,
            role=self.role.value,
            recipient_id=recipient_id,
        ):
            return await self._run(event, recipient_id)

    async def _run(
        self, event: BookingChangeEvent, recipient_id: str | None
    ) -> PipelineResult:
        # CLASSIFIED
        transition = classify_event(event)
        if transition.kind is TransitionKind.MALFORMED:
            logger.warning("malformed_booking_snapshot", problem=event.malformed)
            return self._no_op(recipient_id, "malformed snapshot")
        if transition.kind is TransitionKind.DELETED:
            logger.info("booking_deleted")
            return self._no_op(recipient_id, "booking deleted")
        if transition.kind is TransitionKind.UNCHANGED:
            logger.info("booking_status_unchanged", status=transition.to_status.name)
            return self._no_op(recipient_id, "status unchanged")

        # POLICY_EVALUATED
        decision = self._policy.evaluate(transition)
        if isinstance(decision, Skip):
            logger.info(
                "notification_skipped",
                reason=decision.reason,
                transition=transition.kind.value,
                to_status=transition.to_status.name if transition.to_status else None,
            )
            return self._no_op(recipient_id, decision.reason)

        if recipient_id is None:
            logger.warning("notification_recipient_missing")
            return self._no_op(None, REASON_NO_RECIPIENT)

        # TARGETS_RESOLVED
        targets = await self._resolver.resolve(self.role, recipient_id)
        if not targets:
            logger.info("no_delivery_targets")
            return self._no_op(recipient_id, REASON_NO_TARGETS)
        logger.info("delivery_targets_found", target_count=len(targets))

        # DISPATCHED
        outcomes = await self._dispatcher.dispatch(targets, decision.payload)

        # RECONCILED
        removed = await self._reconciler.reconcile(self.role, recipient_id, outcomes)

        return PipelineResult(
            role=self.role,
            recipient_id=recipient_id,
            state=PipelineState.DONE,
            dispatched=len(outcomes),
            delivered=sum(1 for item in outcomes if item.outcome.is_delivered),
            removed_tokens=tuple(removed),
        )

    def _no_op(self, recipient_id: str | None, reason: str) -> PipelineResult:
        return PipelineResult(
            role=self.role,
            recipient_id=recipient_id,
            state=PipelineState.DONE_NO_OP,
            reason=reason,
        )

"""Booking trigger API request/response models.

Pydantic models for the change-feed trigger endpoint. Snapshots are
accepted as arbitrary JSON: deciding whether a snapshot is usable is the
domain boundary's job (``Booking.from_snapshot``), not the schema's.
"""

from typing import Any

from pydantic import BaseModel, Field

from booking_notify.application.services.booking_trigger_service import (
    TriggerResult,
)


class BookingWriteRequest(BaseModel):
    """One write to ``bookings/{provider_id}/{booking_id}``.

    Attributes:
        before: Snapshot before the write; null on creation.
        after: Snapshot after the write; null on deletion.
    """

    before: Any = Field(default=None, description="Snapshot before the write")
    after: Any = Field(default=None, description="Snapshot after the write")


class PipelineResultModel(BaseModel):
    """Result of one role pipeline."""

    role: str = Field(..., description="Recipient role (panel or client)")
    recipient_id: str | None = Field(default=None, description="Recipient identity")
    state: str = Field(..., description="Terminal pipeline state")
    reason: str | None = Field(default=None, description="Why the run ended early")
    dispatched: int = Field(default=0, description="Tokens the payload was sent to")
    delivered: int = Field(default=0, description="Tokens reported as delivered")
    removed_tokens: list[str] = Field(
        default_factory=list, description="Tokens pruned from the registry"
    )


class BookingWriteResponse(BaseModel):
    """Response for a processed booking write."""

    booking_id: str
    results: list[PipelineResultModel]

    @classmethod
    def from_result(cls, result: TriggerResult) -> "BookingWriteResponse":
        return cls(
            booking_id=result.booking_id,
            results=[
                PipelineResultModel(
                    role=item.role.value,
                    recipient_id=item.recipient_id,
                    state=item.state.value,
                    reason=item.reason,
                    dispatched=item.dispatched,
                    delivered=item.delivered,
                    removed_tokens=list(item.removed_tokens),
                )
                for item in result.results
            ],
        )


class TriggerErrorResponse(BaseModel):
    """RFC 7807 problem details for a failed trigger."""

    type: str = Field(..., description="Error type URI")
    title: str = Field(..., description="Human-readable error title")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Detailed error message")
    instance: str = Field(..., description="Request path that caused the error")

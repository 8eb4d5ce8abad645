"""Booking trigger API routes.

The change feed calls this endpoint once per write to
``bookings/{provider_id}/{booking_id}``, passing the snapshots before and
after the write.

Developer Golden Rules:
1. Non-events (deleted, unchanged, skipped, no targets) are 200 responses
2. Collaborator transport failures are 502 so the feed can redeliver
3. The endpoint never retries on its own
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from structlog import get_logger

from booking_notify.api.dependencies.notifier import get_trigger_service
from booking_notify.api.models.trigger import (
    BookingWriteRequest,
    BookingWriteResponse,
    TriggerErrorResponse,
)
from booking_notify.application.services.booking_trigger_service import (
    BookingTriggerService,
)
from booking_notify.domain.errors import (
    GatewayTransportError,
    RegistryTransportError,
)

router = APIRouter(prefix="/v1/triggers", tags=["triggers"])

logger = get_logger()


@router.post(
    "/bookings/{provider_id}/{booking_id}",
    response_model=BookingWriteResponse,
    responses={502: {"model": TriggerErrorResponse}},
)
async def booking_written(
    provider_id: str,
    booking_id: str,
    body: BookingWriteRequest,
    request: Request,
    trigger_service: BookingTriggerService = Depends(get_trigger_service),
) -> BookingWriteResponse:
    """Process one booking write.

    Args:
        provider_id: Provider identity from the change path.
        booking_id: Booking identity from the change path.
        body: Snapshots before and after the write.

    Returns:
        Per-role pipeline results.

    Raises:
        HTTPException: 502 if the token registry or push gateway call failed.
    """
    try:
        result = await trigger_service.handle_write(
            provider_id=provider_id,
            booking_id=booking_id,
            before=body.before,
            after=body.after,
        )
    except RegistryTransportError as e:
        logger.error(
            "booking_trigger_failed",
            booking_id=booking_id,
            collaborator="registry",
            operation=e.operation,
            error=str(e),
        )
        raise HTTPException(
            status_code=502,
            detail={
                "type": "urn:booking-notify:error:registry-unavailable",
                "title": "Token Registry Unavailable",
                "status": 502,
                "detail": str(e),
                "instance": str(request.url),
            },
        ) from None
    except GatewayTransportError as e:
        logger.error(
            "booking_trigger_failed",
            booking_id=booking_id,
            collaborator="gateway",
            operation=e.operation,
            error=str(e),
        )
        raise HTTPException(
            status_code=502,
            detail={
                "type": "urn:booking-notify:error:gateway-unavailable",
                "title": "Push Gateway Unavailable",
                "status": 502,
                "detail": str(e),
                "instance": str(request.url),
            },
        ) from None

    return BookingWriteResponse.from_result(result)

"""Registry reconciliation service.

Prunes tokens that the gateway has proven permanently invalid. Any other
failure (rate limiting, unavailable, internal) leaves the token in place;
the next failed delivery will be looked at again.

Developer Golden Rules:
1. Only the two permanent-invalidity codes cause a removal
2. Removals run concurrently and are awaited together
3. Best-effort cleanup - a failed removal is logged, never raised
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from structlog import get_logger

from booking_notify.application.ports.token_registry import TokenRegistryProtocol
from booking_notify.domain.models.notification import RecipientRole, TokenOutcome

logger = get_logger()


def tokens_to_remove(outcomes: Iterable[TokenOutcome]) -> list[str]:
    """Select the tokens whose outcome proves permanent invalidity.

    Args:
        outcomes: Per-token delivery outcomes.

    Returns:
        Tokens to remove, in outcome order.
    """
    return [item.token for item in outcomes if item.outcome.is_permanently_invalid]


class RegistryReconciler:
    """Remove permanently invalid tokens from the registry."""

    def __init__(self, registry: TokenRegistryProtocol) -> None:
        """Initialize the reconciler.

        Args:
            registry: Token registry to delete from.
        """
        self._registry = registry

    async def reconcile(
        self,
        role: RecipientRole,
        recipient_id: str,
        outcomes: Iterable[TokenOutcome],
    ) -> list[str]:
        """Delete every token the gateway reported as permanently invalid.

        Args:
            role: Recipient role the tokens are registered under.
            recipient_id: Recipient identity the tokens are registered under.
            outcomes: Per-token outcomes from the dispatcher.

        Returns:
            The tokens for which a removal was issued.
        """
        outcomes = list(outcomes)
        removals = tokens_to_remove(outcomes)

        for item in outcomes:
            if not item.outcome.is_delivered and not item.outcome.is_permanently_invalid:
                logger.info(
                    "token_retained",
                    token=item.token,
                    error_code=item.outcome.error_code,
                )

        if not removals:
            return []

        results = await asyncio.gather(
            *(
                self._registry.delete_token(role, recipient_id, token)
                for token in removals
            ),
            return_exceptions=True,
        )

        for token, result in zip(removals, results):
            if isinstance(result, BaseException):
                logger.warning(
                    "token_removal_failed",
                    role=role.value,
                    recipient_id=recipient_id,
                    token=token,
                    error=str(result),
                )
            else:
                logger.info(
                    "token_removed",
                    role=role.value,
                    recipient_id=recipient_id,
                    token=token,
                )

        return removals

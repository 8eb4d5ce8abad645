"""Target resolution service.

Reads the current set of delivery tokens for one recipient. The read is a
single point-in-time snapshot of the registry; nothing is cached between
pipelines.
"""

from __future__ import annotations

from structlog import get_logger

from booking_notify.application.ports.token_registry import TokenRegistryProtocol
from booking_notify.domain.models.notification import RecipientRole

logger = get_logger()


class TargetResolver:
    """Resolve delivery targets from the token registry."""

    def __init__(self, registry: TokenRegistryProtocol) -> None:
        """Initialize the resolver.

        Args:
            registry: Token registry to read from.
        """
        self._registry = registry

    async def resolve(self, role: RecipientRole, recipient_id: str) -> frozenset[str]:
        """Return the tokens registered for a recipient.

        An empty set is a normal outcome, not an error.

        Args:
            role: Recipient role.
            recipient_id: Recipient identity.

        Returns:
            The delivery target set (possibly empty).

        Raises:
            RegistryTransportError: If the registry read fails.
        """
        registered = await self._registry.get_tokens(role, recipient_id)
        targets = frozenset(token for token in registered if token)
        logger.debug(
            "delivery_targets_resolved",
            role=role.value,
            recipient_id=recipient_id,
            target_count=len(targets),
        )
        return targets

"""Token registry protocol.

Application port for the registry of device notification tokens, keyed by
recipient role and recipient identity:

    notificationTokens/{role}/{recipient_id}/{token} -> opaque metadata

The notifier only ever reads a recipient's tokens and deletes individual
tokens; registration is done by the client apps directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from booking_notify.domain.models.notification import RecipientRole


class TokenRegistryProtocol(Protocol):
    """Protocol for token registry operations."""

    async def get_tokens(
        self, role: RecipientRole, recipient_id: str
    ) -> Mapping[str, object]:
        """Read the tokens registered for a recipient.

        Args:
            role: Recipient role (selects the registry branch).
            recipient_id: Recipient identity.

        Returns:
            Mapping of token to opaque metadata; empty when none are registered.

        Raises:
            RegistryTransportError: If the registry cannot be read.
        """
        ...

    async def delete_token(
        self, role: RecipientRole, recipient_id: str, token: str
    ) -> None:
        """Remove a token. Deleting an absent token is not an error.

        Raises:
            RegistryTransportError: If the registry cannot be written.
        """
        ...

"""Token registry stub for development and testing.

In-memory stand-in for the ``notificationTokens/{role}/{recipient}`` tree.
Tracks every read and delete so tests can assert on collaborator calls,
and can be switched into failure modes to simulate transport faults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from structlog import get_logger

from booking_notify.application.ports.token_registry import TokenRegistryProtocol
from booking_notify.domain.errors import RegistryTransportError
from booking_notify.domain.models.notification import RecipientRole

logger = get_logger()


@dataclass
class TokenRegistryStub(TokenRegistryProtocol):
    """In-memory token registry.

    Attributes:
        tokens: Registered tokens keyed by (role, recipient_id).
        get_calls: Every (role, recipient_id) read, in call order.
        delete_calls: Every (role, recipient_id, token) delete, in call order.
        fail_reads: When True, get_tokens raises RegistryTransportError.
        fail_deletes: Tokens whose delete raises RegistryTransportError.
    """

    tokens: dict[tuple[RecipientRole, str], dict[str, object]] = field(
        default_factory=dict
    )
    get_calls: list[tuple[RecipientRole, str]] = field(default_factory=list)
    delete_calls: list[tuple[RecipientRole, str, str]] = field(default_factory=list)
    fail_reads: bool = False
    fail_deletes: set[str] = field(default_factory=set)

    def register_token(
        self,
        role: RecipientRole,
        recipient_id: str,
        token: str,
        metadata: object = True,
    ) -> None:
        """Seed a token, the way a client app would register its device."""
        self.tokens.setdefault((role, recipient_id), {})[token] = metadata

    def tokens_for(self, role: RecipientRole, recipient_id: str) -> set[str]:
        """Currently registered tokens for a recipient (test helper)."""
        return set(self.tokens.get((role, recipient_id), {}))

    async def get_tokens(
        self, role: RecipientRole, recipient_id: str
    ) -> Mapping[str, object]:
        self.get_calls.append((role, recipient_id))
        if self.fail_reads:
            raise RegistryTransportError(
                "Simulated registry read failure", operation="get_tokens"
            )
        return dict(self.tokens.get((role, recipient_id), {}))

    async def delete_token(
        self, role: RecipientRole, recipient_id: str, token: str
    ) -> None:
        self.delete_calls.append((role, recipient_id, token))
        if token in self.fail_deletes:
            raise RegistryTransportError(
                "Simulated registry delete failure", operation="delete_token"
            )
        branch = self.tokens.get((role, recipient_id))
        if branch is None or token not in branch:
            logger.debug("stub_token_already_absent", role=role.value, token=token)
            return
        del branch[token]
        if not branch:
            del self.tokens[(role, recipient_id)]

    def reset(self) -> None:
        """Clear all tokens, recorded calls and failure modes."""
        self.tokens.clear()
        self.get_calls.clear()
        self.delete_calls.clear()
        self.fail_reads = False
        self.fail_deletes.clear()

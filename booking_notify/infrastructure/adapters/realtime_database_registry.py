"""Token registry adapter for a realtime-database REST endpoint.

Tokens live under ``{base_url}/notificationTokens/{role}/{recipient_id}``
as the keys of a JSON object. The REST protocol addresses any node by
appending ``.json`` to its path:

    GET    .../notificationTokens/panel/P1.json        -> {"tok": true, ...} | null
    DELETE .../notificationTokens/panel/P1/tok.json    -> null

Deleting a node that does not exist succeeds with ``null``, which gives the
idempotent delete the registry port requires.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import quote

import httpx
import structlog

from booking_notify.application.ports.token_registry import TokenRegistryProtocol
from booking_notify.domain.errors import RegistryTransportError
from booking_notify.domain.models.notification import RecipientRole

log = structlog.get_logger()

DEFAULT_TOKEN_ROOT = "notificationTokens"


class RealtimeDatabaseTokenRegistry(TokenRegistryProtocol):
    """Read and prune device tokens over the realtime-database REST API.

    The httpx client is injected; its lifecycle belongs to the bootstrap
    that created it.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        auth_token: str | None = None,
        token_root: str = DEFAULT_TOKEN_ROOT,
    ) -> None:
        """Initialize the adapter.

        Args:
            client: Shared async HTTP client.
            base_url: Database base URL (e.g. https://example.firebaseio.com).
            auth_token: Database secret or ID token, sent as the ``auth`` parameter.
            token_root: Top-level node holding the token tree.
        """
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._auth_token = auth_token
        self._token_root = token_root.strip("/")

    def node_url(self, *segments: str) -> str:
        """Build the REST URL of a node below the token root."""
        path = "/".join(quote(segment, safe="") for segment in segments)
        return f"{self._base_url}/{self._token_root}/{path}.json"

    def _params(self) -> dict[str, str]:
        if self._auth_token:
            return {"auth": self._auth_token}
        return {}

    async def get_tokens(
        self, role: RecipientRole, recipient_id: str
    ) -> Mapping[str, object]:
        url = self.node_url(role.value, recipient_id)
        try:
            response = await self._client.get(url, params=self._params())
        except httpx.HTTPError as e:
            raise RegistryTransportError(
                f"Token registry read failed: {e}", operation="get_tokens"
            ) from e

        if response.is_error:
            raise RegistryTransportError(
                f"Token registry read returned HTTP {response.status_code}",
                operation="get_tokens",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RegistryTransportError(
                "Token registry returned invalid JSON", operation="get_tokens"
            ) from e

        if body is None:
            return {}
        if not isinstance(body, dict):
            raise RegistryTransportError(
                f"Token registry returned {type(body).__name__}, expected object",
                operation="get_tokens",
            )
        return body

    async def delete_token(
        self, role: RecipientRole, recipient_id: str, token: str
    ) -> None:
        url = self.node_url(role.value, recipient_id, token)
        try:
            response = await self._client.delete(url, params=self._params())
        except httpx.HTTPError as e:
            raise RegistryTransportError(
                f"Token registry delete failed: {e}", operation="delete_token"
            ) from e

        if response.status_code == 404:
            log.debug("registry_token_already_absent", token=token)
            return
        if response.is_error:
            raise RegistryTransportError(
                f"Token registry delete returned HTTP {response.status_code}",
                operation="delete_token",
                status_code=response.status_code,
            )

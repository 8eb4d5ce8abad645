"""Notifier configuration.

Settings for the collaborator adapters, payload shapes and logging, with
environment variable overrides. Leaving the registry URL or the Firebase
credentials unset selects the corresponding in-memory stub, which is what
local development and the test suite run against. A production config must
name both, so a missing variable fails startup instead of silently dropping
every notification.

Environment Variables:
- NOTIFIER_ENVIRONMENT: "production" for JSON logs (default: development)
- NOTIFIER_REGISTRY_URL: Realtime-database base URL (default: unset -> stub)
- NOTIFIER_REGISTRY_AUTH: Database secret/token sent as ``auth`` (default: unset)
- NOTIFIER_FIREBASE_CREDENTIALS: Service-account JSON file path (default: unset -> stub)
- NOTIFIER_HTTP_TIMEOUT: HTTP timeout in seconds (default: 10.0)
- NOTIFIER_PROVIDER_PAYLOAD_STYLE: notification|data (default: notification)
- NOTIFIER_USER_PAYLOAD_STYLE: notification|data (default: data)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from booking_notify.domain.errors import ConfigurationError
from booking_notify.domain.models.notification import PayloadStyle

PRODUCTION_ENVIRONMENT = "production"


def _get_str_env(key: str) -> str | None:
    """Get a non-empty string environment variable, or None."""
    value = os.environ.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_style_env(key: str, default: PayloadStyle) -> PayloadStyle:
    value = _get_str_env(key)
    if value is None:
        return default
    try:
        return PayloadStyle(value.lower())
    except ValueError as e:
        raise ConfigurationError(
            key, f"unknown payload style {value!r} (expected notification or data)"
        ) from e


@dataclass(frozen=True)
class NotifierConfig:
    """Configuration for the booking notifier.

    Attributes:
        environment: Deployment environment; "production" selects JSON logs.
        registry_url: Realtime-database base URL; None selects the stub registry.
        registry_auth: Credential sent as the ``auth`` query parameter.
        firebase_credentials: Path to a Firebase service-account JSON file;
            None selects the stub gateway.
        http_timeout_seconds: Timeout applied to every collaborator HTTP call.
        provider_payload_style: Payload shape for provider notifications.
        user_payload_style: Payload shape for user notifications.
    """

    environment: str = "development"
    registry_url: str | None = None
    registry_auth: str | None = None
    firebase_credentials: str | None = None
    http_timeout_seconds: float = 10.0
    provider_payload_style: PayloadStyle = PayloadStyle.NOTIFICATION
    user_payload_style: PayloadStyle = PayloadStyle.DATA

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.http_timeout_seconds <= 0:
            raise ConfigurationError(
                "http_timeout_seconds",
                f"must be positive, got {self.http_timeout_seconds}",
            )
        if self.registry_url is not None:
            parsed = urlparse(self.registry_url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ConfigurationError(
                    "registry_url", f"must be an http(s) URL, got {self.registry_url!r}"
                )
        if not isinstance(self.provider_payload_style, PayloadStyle):
            raise ConfigurationError(
                "provider_payload_style",
                f"must be a PayloadStyle, got {self.provider_payload_style!r}",
            )
        if not isinstance(self.user_payload_style, PayloadStyle):
            raise ConfigurationError(
                "user_payload_style",
                f"must be a PayloadStyle, got {self.user_payload_style!r}",
            )
        if self.environment == PRODUCTION_ENVIRONMENT:
            if self.uses_stub_registry:
                raise ConfigurationError(
                    "registry_url", "must be set in production (NOTIFIER_REGISTRY_URL)"
                )
            if self.uses_stub_gateway:
                raise ConfigurationError(
                    "firebase_credentials",
                    "must be set in production (NOTIFIER_FIREBASE_CREDENTIALS)",
                )

    @property
    def uses_stub_registry(self) -> bool:
        return self.registry_url is None

    @property
    def uses_stub_gateway(self) -> bool:
        return self.firebase_credentials is None

    @classmethod
    def from_environment(cls) -> NotifierConfig:
        """Create config from environment variables with defaults.

        Returns:
            NotifierConfig with values from environment or defaults.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        return cls(
            environment=_get_str_env("NOTIFIER_ENVIRONMENT") or "development",
            registry_url=_get_str_env("NOTIFIER_REGISTRY_URL"),
            registry_auth=_get_str_env("NOTIFIER_REGISTRY_AUTH"),
            firebase_credentials=_get_str_env("NOTIFIER_FIREBASE_CREDENTIALS"),
            http_timeout_seconds=_get_float_env("NOTIFIER_HTTP_TIMEOUT", 10.0),
            provider_payload_style=_get_style_env(
                "NOTIFIER_PROVIDER_PAYLOAD_STYLE", PayloadStyle.NOTIFICATION
            ),
            user_payload_style=_get_style_env(
                "NOTIFIER_USER_PAYLOAD_STYLE", PayloadStyle.DATA
            ),
        )


# Default config: in-memory collaborators, console logs
DEFAULT_NOTIFIER_CONFIG = NotifierConfig()

# Testing config: stubs for both collaborators, short timeout
TEST_NOTIFIER_CONFIG = NotifierConfig(
    environment="test",
    http_timeout_seconds=1.0,
)

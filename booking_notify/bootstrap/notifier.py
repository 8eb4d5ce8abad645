"""Bootstrap wiring for the notification pipeline.

Builds every component explicitly from a NotifierConfig and hands each one
its collaborators at construction time. There is no process-wide client
handle: whoever calls ``create_notifier`` (or enters ``notifier_lifespan``)
owns the resulting objects, the HTTP client and the Firebase app behind them.

Usage:
    async with notifier_lifespan(NotifierConfig.from_environment()) as notifier:
        await notifier.trigger_service.handle_write(provider_id, booking_id, before, after)
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import firebase_admin
import httpx
from firebase_admin import credentials
from structlog import get_logger

from booking_notify.application.ports.push_gateway import PushGatewayProtocol
from booking_notify.application.ports.token_registry import TokenRegistryProtocol
from booking_notify.application.services.booking_trigger_service import (
    BookingTriggerService,
)
from booking_notify.application.services.fanout_dispatcher import FanoutDispatcher
from booking_notify.application.services.notification_pipeline import (
    NotificationPipeline,
)
from booking_notify.application.services.registry_reconciler import (
    RegistryReconciler,
)
from booking_notify.application.services.target_resolver import TargetResolver
from booking_notify.config.notifier_config import NotifierConfig
from booking_notify.domain.errors import ConfigurationError
from booking_notify.domain.services.notification_policy import (
    NotificationPolicy,
    ProviderNotificationPolicy,
    UserNotificationPolicy,
)
from booking_notify.infrastructure.adapters.firebase_push_gateway import (
    FirebasePushGateway,
)
from booking_notify.infrastructure.adapters.realtime_database_registry import (
    RealtimeDatabaseTokenRegistry,
)
from booking_notify.infrastructure.stubs.push_gateway_stub import PushGatewayStub
from booking_notify.infrastructure.stubs.token_registry_stub import TokenRegistryStub

logger = get_logger()


@dataclass
class Notifier:
    """Fully wired notifier.

    Attributes:
        registry: Token registry shared by both pipelines.
        gateway: Push gateway shared by both pipelines.
        provider_pipeline: Pipeline notifying the provider panel.
        user_pipeline: Pipeline notifying the booking user.
        trigger_service: Entry point that runs both pipelines per write.
    """

    registry: TokenRegistryProtocol
    gateway: PushGatewayProtocol
    provider_pipeline: NotificationPipeline
    user_pipeline: NotificationPipeline
    trigger_service: BookingTriggerService


def build_pipeline(
    policy: NotificationPolicy,
    registry: TokenRegistryProtocol,
    gateway: PushGatewayProtocol,
) -> NotificationPipeline:
    """Wire one role pipeline around shared collaborators."""
    return NotificationPipeline(
        policy=policy,
        resolver=TargetResolver(registry),
        dispatcher=FanoutDispatcher(gateway),
        reconciler=RegistryReconciler(registry),
    )


def build_notifier(
    config: NotifierConfig,
    registry: TokenRegistryProtocol,
    gateway: PushGatewayProtocol,
) -> Notifier:
    """Wire both role pipelines and the trigger service.

    Args:
        config: Notifier configuration (payload styles).
        registry: Token registry implementation.
        gateway: Push gateway implementation.

    Returns:
        The wired Notifier.
    """
    provider_pipeline = build_pipeline(
        ProviderNotificationPolicy(style=config.provider_payload_style),
        registry,
        gateway,
    )
    user_pipeline = build_pipeline(
        UserNotificationPolicy(style=config.user_payload_style),
        registry,
        gateway,
    )
    return Notifier(
        registry=registry,
        gateway=gateway,
        provider_pipeline=provider_pipeline,
        user_pipeline=user_pipeline,
        trigger_service=BookingTriggerService([provider_pipeline, user_pipeline]),
    )


FIREBASE_APP_NAME = "booking-notify"


def initialize_firebase_app(config: NotifierConfig) -> firebase_admin.App:
    """Initialize the named Firebase app from the configured service account.

    Args:
        config: Notifier configuration with ``firebase_credentials`` set.

    Returns:
        The initialized Firebase app. The caller deletes it on shutdown.

    Raises:
        ConfigurationError: If the credentials are unset, unreadable or invalid.
    """
    if config.firebase_credentials is None:
        raise ConfigurationError(
            "firebase_credentials", "a service-account file is required"
        )
    try:
        certificate = credentials.Certificate(config.firebase_credentials)
        return firebase_admin.initialize_app(certificate, name=FIREBASE_APP_NAME)
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            "firebase_credentials",
            f"cannot load {config.firebase_credentials!r}: {e}",
        ) from e


def _create_registry(
    config: NotifierConfig, http_client: httpx.AsyncClient | None
) -> TokenRegistryProtocol:
    if config.registry_url is None:
        return TokenRegistryStub()
    if http_client is None:
        raise ConfigurationError(
            "http_client", "an HTTP client is required for the realtime-database registry"
        )
    return RealtimeDatabaseTokenRegistry(
        http_client,
        base_url=config.registry_url,
        auth_token=config.registry_auth,
    )


def _create_gateway(
    config: NotifierConfig, firebase_app: firebase_admin.App | None
) -> PushGatewayProtocol:
    if config.uses_stub_gateway:
        return PushGatewayStub()
    if firebase_app is None:
        raise ConfigurationError(
            "firebase_app", "an initialized Firebase app is required for push delivery"
        )
    return FirebasePushGateway(firebase_app)


def create_notifier(
    config: NotifierConfig,
    http_client: httpx.AsyncClient | None = None,
    firebase_app: firebase_admin.App | None = None,
) -> Notifier:
    """Create a notifier with real adapters where configured, stubs elsewhere.

    Args:
        config: Notifier configuration.
        http_client: HTTP client for the realtime-database registry. Required
            when the registry URL is configured.
        firebase_app: Firebase app for push delivery. Required when Firebase
            credentials are configured.

    Returns:
        The wired Notifier.

    Raises:
        ConfigurationError: If a real adapter is configured without the
            client or app it runs on.
    """
    registry = _create_registry(config, http_client)
    gateway = _create_gateway(config, firebase_app)

    logger.info(
        "notifier_created",
        registry=type(registry).__name__,
        gateway=type(gateway).__name__,
        provider_payload_style=config.provider_payload_style.value,
        user_payload_style=config.user_payload_style.value,
    )
    return build_notifier(config, registry, gateway)


@asynccontextmanager
async def notifier_lifespan(config: NotifierConfig) -> AsyncIterator[Notifier]:
    """Create a notifier that owns its HTTP client and Firebase app for the block.

    Args:
        config: Notifier configuration.

    Yields:
        The wired Notifier.
    """
    firebase_app = None
    if not config.uses_stub_gateway:
        firebase_app = initialize_firebase_app(config)
    try:
        async with httpx.AsyncClient(timeout=config.http_timeout_seconds) as client:
            yield create_notifier(
                config, http_client=client, firebase_app=firebase_app
            )
    finally:
        if firebase_app is not None:
            firebase_admin.delete_app(firebase_app)

"""Configuration module for the booking notifier.

Available Configurations:
- NotifierConfig: Collaborator endpoints, payload styles and logging
"""

from booking_notify.config.notifier_config import (
    DEFAULT_NOTIFIER_CONFIG,
    TEST_NOTIFIER_CONFIG,
    NotifierConfig,
)

__all__ = [
    "NotifierConfig",
    "DEFAULT_NOTIFIER_CONFIG",
    "TEST_NOTIFIER_CONFIG",
]

"""Configuration errors raised while building notifier settings."""

from booking_notify.domain.exceptions import NotifierError


class ConfigurationError(NotifierError):
    """Raised when a notifier setting is missing or invalid.

    Attributes:
        setting: Name of the offending setting.
    """

    def __init__(self, setting: str, message: str) -> None:
        super().__init__(f"{setting}: {message}")
        self.setting = setting

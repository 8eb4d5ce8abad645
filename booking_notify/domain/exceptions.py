"""Base exception classes for the booking notifier domain layer."""


class NotifierError(Exception):
    """Base exception for all notifier errors.

    All notifier-specific exceptions MUST inherit from this class so the
    inbound boundary can map them to a single failure response.

    Expected non-events (deleted booking, unchanged status, policy skip,
    no delivery targets) are never raised; they end the pipeline normally.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)

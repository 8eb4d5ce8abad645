"""Transport errors for the registry and push gateway collaborators.

These errors mean the collaborator call itself failed, not that an
individual delivery target was rejected. Per-token rejections are data
(``DeliveryOutcome``) and never raise.

Transport errors propagate out of the pipeline unchanged. The notifier
performs no retry; whoever invoked the trigger owns the retry policy.
"""

from booking_notify.domain.exceptions import NotifierError


class TransportError(NotifierError):
    """Base error for a failed collaborator call.

    Attributes:
        operation: Name of the failing operation (e.g. "get_tokens").
        status_code: HTTP status returned by the collaborator, if any.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        status_code: int | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Error message.
            operation: Name of the failing operation.
            status_code: HTTP status code when the failure was an HTTP response.
        """
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code


class RegistryTransportError(TransportError):
    """Raised when a token registry read or delete fails."""


class GatewayTransportError(TransportError):
    """Raised when the push gateway batch call fails as a whole."""


class GatewayResponseError(GatewayTransportError):
    """Raised when the gateway answers with a response that breaks its contract.

    The dispatcher maps outcomes back to tokens by position, so a result
    list whose length differs from the submitted batch cannot be used.
    """

    def __init__(self, message: str, expected: int, received: int) -> None:
        super().__init__(message, operation="send_batch")
        self.expected = expected
        self.received = received

"""
AI gateway error types.

Every failure leaves the gateway as exactly one of these, carrying a message
that can be shown to the user verbatim.
"""

# Shown when the provider gives us nothing better to say
GENERIC_FAILURE_MESSAGE = "AI generation failed. Please try again."


class GatewayError(Exception):
    """Base exception for gateway errors."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class MissingCredentialError(GatewayError):
    """Raised before any I/O when the caller supplied no API key.

    Clients look for "API Key" in the message to prompt for re-entry.
    """

    def __init__(
        self,
        message: str = "API Key is missing. Please set your API key in settings.",
    ):
        super().__init__(message)


class TransportError(GatewayError):
    """Raised when the provider call fails (network, HTTP status, provider error)."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message or GENERIC_FAILURE_MESSAGE, cause)
        self.status_code = status_code

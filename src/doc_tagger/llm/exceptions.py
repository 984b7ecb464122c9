"""
Custom exceptions for the tagging client.

Every failure of a tagging call surfaces as one of these. The ``message``
is user-readable (it is shown to whoever asked for the tags); ``details``
carries the raw vendor message and status for logs. ``kind`` is a stable
machine-readable label used by the API error handlers and metrics.
"""


class TaggingError(Exception):
    """
    Base exception for all tagging errors.

    Catch this to handle any classified failure with a single except clause.
    Also used directly for the generic "anything else" category.
    """
    kind = "generic_failure"

    def __init__(self, message: str = "Error while generating tags.", details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidCredentialsError(TaggingError):
    """API key missing, malformed or rejected by the endpoint."""
    kind = "invalid_credentials"


class RateLimitedError(TaggingError):
    """Too many requests in the current window."""
    kind = "rate_limited"


class QuotaExhaustedError(TaggingError):
    """
    Account is out of credits or hit its monthly spend cap.

    Reported by OpenAI with the same 429 status as rate limiting, so the
    two are only distinguishable by error code or message text.
    """
    kind = "quota_exhausted"


class ServerFaultError(TaggingError):
    """The provider failed while processing the request."""
    kind = "server_fault"


class ServerOverloadedError(ServerFaultError):
    """The provider is shedding load. Retrying later usually works."""
    kind = "server_overloaded"


class InputTooLargeError(TaggingError):
    """Prompt (catalog + document) exceeds the model's context window."""
    kind = "input_too_large"


class BadEndpointError(TaggingError):
    """The configured custom base URL is not a valid URL."""
    kind = "bad_endpoint"


class UnreachableEndpointError(TaggingError):
    """The configured custom base URL could not be reached."""
    kind = "unreachable_endpoint"


GENERIC_FAILURE_MESSAGE = "Error while generating tags."


class OutputParseError(ValueError):
    """
    Raised when the model reply cannot be turned into tag lists.

    Not a TaggingError: the client classifies it like any other failure,
    which makes it surface as the generic category.
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

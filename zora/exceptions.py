"""
Error taxonomy for the relay and the client session.

Every RelayError carries the HTTP status and the message that the API layer
puts in the {"error": "..."} envelope.
"""

from config import QUOTA_EXHAUSTED_MESSAGE, RATE_LIMIT_MESSAGE


class ZoraError(Exception):
    """Base exception for the Zora companion."""


class RelayError(ZoraError):
    """Base for failures reported by the relay endpoint."""

    status_code = 500

    def __init__(self, message: str = "An error occurred"):
        super().__init__(message)
        self.message = message


class InvalidRequest(RelayError):
    """Missing or malformed input. Reported as 500, like every non-gateway failure."""


class ConfigurationError(RelayError):
    """Server misconfiguration, e.g. the gateway API key is not set."""


class RateLimited(RelayError):
    """The gateway answered 429."""

    status_code = 429

    def __init__(self, message: str = RATE_LIMIT_MESSAGE):
        super().__init__(message)


class QuotaExhausted(RelayError):
    """The gateway answered 402."""

    status_code = 402

    def __init__(self, message: str = QUOTA_EXHAUSTED_MESSAGE):
        super().__init__(message)


class UpstreamError(RelayError):
    """Any other gateway failure: bad status, network error, timeout, unreadable body."""


class ClientCapabilityUnavailable(ZoraError):
    """A speech capability is missing on the client; the session falls back to text."""

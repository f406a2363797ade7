"""
Session error taxonomy.

Transport failures reach callers as events on the bus; the exceptions here
are raised synchronously at the call site for caller-logic errors.
"""


class SessionError(Exception):
    """Base class for all client session errors."""


class NotConnected(SessionError):
    """Raised when sending while the transport channel is not open."""


class CapabilityUnavailable(SessionError):
    """Raised when the connection primitive cannot be used in this environment."""


class ConnectFailed(SessionError):
    """A connection attempt was made but never reached the open state."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Connection to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class InvalidReference(SessionError, LookupError):
    """Raised for operations on an unknown id or index."""

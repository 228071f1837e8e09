"""Session errors.

"No session" and "record not found" are not errors: they are returned as
``None``. Everything here signals misuse or a failing store.
"""


class SessionError(Exception):
    """Base class for session errors."""


class InvalidOperationError(SessionError):
    """Raised when writing to a session that has no session id."""

    def __init__(self, message: str = "No session id, cannot update empty session") -> None:
        super().__init__(message)


class StaleHandleError(SessionError):
    """Raised when a session is updated without having been loaded or created."""

    def __init__(self, message: str = "Session had no data before, was this a valid session?") -> None:
        super().__init__(message)


class SessionStoreError(SessionError):
    """Raised when the backing store fails (transport, permissions, throttling)."""


class UnsupportedValueError(SessionError, TypeError):
    """Raised for attribute values that are not text, boolean or number."""

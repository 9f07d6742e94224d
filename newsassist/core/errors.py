"""
Error types.

BackendError comes out of backend clients. The controller turns it into one of
the surfaced notices (SessionCreateError, HistoryFetchError, SessionDeleteError,
SendMessageError). LastSessionError and ValidationError are raised to the caller
before an operation starts.
"""

from typing import Optional


class NewsAssistError(Exception):
    """Base exception for this package."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BackendError(NewsAssistError):
    """Transport, HTTP status or response-format failure talking to the API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SessionCreateError(NewsAssistError):
    pass


class HistoryFetchError(NewsAssistError):
    pass


class SessionDeleteError(NewsAssistError):
    pass


class SendMessageError(NewsAssistError):
    pass


class LastSessionError(NewsAssistError):
    """The only remaining session cannot be deleted."""

    def __init__(self, message: str = "You cannot delete the last active session. Please create a new chat first."):
        super().__init__(message)


class ValidationError(NewsAssistError):
    """Empty input, missing active session or unknown session id."""

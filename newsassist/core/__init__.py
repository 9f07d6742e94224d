"""Core modules: schemas, errors, session directory, session controller."""

from .schemas import (
    GREETING_TEXT,
    APOLOGY_TEXT,
    Source,
    Message,
    Session,
    SessionDirectoryEntry,
    ControllerStatus,
    ControllerSnapshot,
    CreateSessionResponse,
    HistoryResponse,
    ChatRequest,
    ChatResponse,
    greeting_message,
    apology_message,
)
from .errors import (
    NewsAssistError,
    BackendError,
    SessionCreateError,
    HistoryFetchError,
    SessionDeleteError,
    SendMessageError,
    LastSessionError,
    ValidationError,
)
from .directory import SessionDirectory, format_label
from .session import SessionController

__all__ = [
    # Schemas
    "GREETING_TEXT",
    "APOLOGY_TEXT",
    "Source",
    "Message",
    "Session",
    "SessionDirectoryEntry",
    "ControllerStatus",
    "ControllerSnapshot",
    "CreateSessionResponse",
    "HistoryResponse",
    "ChatRequest",
    "ChatResponse",
    "greeting_message",
    "apology_message",
    # Errors
    "NewsAssistError",
    "BackendError",
    "SessionCreateError",
    "HistoryFetchError",
    "SessionDeleteError",
    "SendMessageError",
    "LastSessionError",
    "ValidationError",
    # Directory & Controller
    "SessionDirectory",
    "format_label",
    "SessionController",
]

from datetime import datetime
from enum import Enum
from typing import List, Optional, Literal
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

GREETING_TEXT = "Hello! I am your news assistant. Ask me anything about the latest news."
APOLOGY_TEXT = "Sorry, something went wrong. Please try again."

# 1. MESSAGE SCHEMA (Transcript)
class Source(BaseModel):
    """
    A cited article attached to an assistant answer.
    """
    source: str
    link: str

class Message(BaseModel):
    """
    Single transcript message.
    """
    role: Literal["user", "assistant"]
    content: str
    sources: Optional[List[Source]] = Field(
        default=None,
        description="Citations, only on assistant messages that cite material"
    )

    @field_validator("sources")
    @classmethod
    def _empty_sources_are_absent(cls, value: Optional[List[Source]]) -> Optional[List[Source]]:
        return value or None


def greeting_message() -> Message:
    return Message(role="assistant", content=GREETING_TEXT)

def apology_message() -> Message:
    return Message(role="assistant", content=APOLOGY_TEXT)


# 2. SESSION & DIRECTORY SCHEMAS
class Session(BaseModel):
    """
    A server-tracked conversation. Immutable once created.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime = Field(default_factory=datetime.now)

class SessionDirectoryEntry(BaseModel):
    """
    Display projection of a Session as persisted in the local directory.

    Older clients stored the label under "date"; both keys are accepted on load.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    label: str = Field(validation_alias=AliasChoices("label", "date"))


# 3. CONTROLLER STATE SCHEMA
class ControllerStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"

class ControllerSnapshot(BaseModel):
    """
    Read model handed to views. A copy; mutating it has no effect on the controller.
    """
    model_config = ConfigDict(frozen=True)

    status: ControllerStatus = ControllerStatus.UNINITIALIZED
    active_session_id: Optional[str] = None
    transcript: List[Message] = Field(default_factory=list)
    pending: bool = False
    directory: List[SessionDirectoryEntry] = Field(default_factory=list)
    last_error: Optional[str] = Field(
        default=None,
        description="Message of the most recent surfaced, non-fatal error"
    )


# 4. WIRE SCHEMAS (JSON API)
class CreateSessionResponse(BaseModel):
    """POST /session"""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")

class HistoryResponse(BaseModel):
    """GET /history/{id}"""
    history: List[Message] = Field(default_factory=list)

    @field_validator("history", mode="before")
    @classmethod
    def _null_history_is_empty(cls, value):
        return [] if value is None else value

class ChatRequest(BaseModel):
    """POST /chat body"""
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    message: str

class ChatResponse(BaseModel):
    """POST /chat"""
    answer: str
    sources: List[Source] = Field(default_factory=list)

    @field_validator("sources", mode="before")
    @classmethod
    def _null_sources_are_empty(cls, value):
        return [] if value is None else value

from abc import ABC, abstractmethod
from newsassist.core.schemas import ChatResponse, CreateSessionResponse, HistoryResponse

class BaseBackend(ABC):
    """
    Base class for news assistant backends.

    Every method may raise BackendError.
    """

    @abstractmethod
    async def create_session(self) -> CreateSessionResponse:
        """Create a new server-side session with a fresh id."""
        pass

    @abstractmethod
    async def fetch_history(self, session_id: str) -> HistoryResponse:
        """Return the session's transcript, empty for a new session."""
        pass

    @abstractmethod
    async def send_message(self, session_id: str, text: str) -> ChatResponse:
        """Append text to the session and return the assistant's reply."""
        pass

    @abstractmethod
    async def delete_session(self, session_id: str) -> None:
        """Drop server-side state for the session. Idempotent."""
        pass

    async def close(self) -> None:
        """Release network resources, if any."""
        pass

import asyncio
from typing import Dict, List, Optional, Set, Tuple

from newsassist.backends.base import BaseBackend
from newsassist.core.errors import BackendError
from newsassist.core.schemas import ChatResponse, CreateSessionResponse, HistoryResponse, Message, Source
from newsassist.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ANSWER = "This is an offline reply. Connect to the news service for real answers."


class MockBackendClient(BaseBackend):
    """
    In-process stand-in for the news service.

    Keeps per-session histories in memory and records every call in `calls` as
    (operation, *args). Used by the test suite and by `main.py --offline`.

    Knobs:
        fail: operation names ("create_session", "fetch_history", "send_message",
              "delete_session") that raise BackendError
        gate: when set to an asyncio.Event, every call waits on it before answering
    """

    def __init__(
        self,
        histories: Optional[Dict[str, List[Message]]] = None,
        answer: str = DEFAULT_ANSWER,
        sources: Optional[List[Source]] = None,
    ):
        self.histories: Dict[str, List[Message]] = {
            session_id: list(messages) for session_id, messages in (histories or {}).items()
        }
        self.answer = answer
        self.sources: List[Source] = list(sources or [])
        self.calls: List[Tuple] = []
        self.fail: Set[str] = set()
        self.gate: Optional[asyncio.Event] = None
        self._next_id = 1

    def calls_to(self, operation: str) -> List[Tuple]:
        return [call for call in self.calls if call[0] == operation]

    async def _enter(self, operation: str, *args) -> None:
        self.calls.append((operation, *args))
        if self.gate is not None:
            await self.gate.wait()
        if operation in self.fail:
            logger.debug(f"Mock backend failing {operation}{args}")
            raise BackendError(f"Simulated network failure in {operation}")

    async def create_session(self) -> CreateSessionResponse:
        await self._enter("create_session")
        session_id = f"session-{self._next_id}"
        self._next_id += 1
        self.histories[session_id] = []
        return CreateSessionResponse(session_id=session_id)

    async def fetch_history(self, session_id: str) -> HistoryResponse:
        await self._enter("fetch_history", session_id)
        return HistoryResponse(history=list(self.histories.get(session_id, [])))

    async def send_message(self, session_id: str, text: str) -> ChatResponse:
        await self._enter("send_message", session_id, text)
        history = self.histories.setdefault(session_id, [])
        history.append(Message(role="user", content=text))
        history.append(Message(role="assistant", content=self.answer, sources=self.sources))
        return ChatResponse(answer=self.answer, sources=self.sources)

    async def delete_session(self, session_id: str) -> None:
        await self._enter("delete_session", session_id)
        self.histories.pop(session_id, None)

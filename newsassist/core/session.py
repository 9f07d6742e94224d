from typing import TYPE_CHECKING, Callable, List, Optional

from newsassist.core.directory import SessionDirectory
from newsassist.core.errors import (
    BackendError,
    HistoryFetchError,
    LastSessionError,
    NewsAssistError,
    SessionCreateError,
    SessionDeleteError,
    ValidationError,
)
from newsassist.core.schemas import (
    ControllerSnapshot,
    ControllerStatus,
    Message,
    Session,
    apology_message,
    greeting_message,
)
from newsassist.storage.base import ACTIVE_SESSION_KEY
from newsassist.utils.logger import get_logger

if TYPE_CHECKING:
    from newsassist.backends.base import BaseBackend
    from newsassist.storage.base import PersistenceAdapter

logger = get_logger(__name__)

Listener = Callable[[ControllerSnapshot], None]


class SessionController:
    """
    Owns the active session, its transcript and the in-flight flag.

    Responsibilities:
    - Create, switch, reset and delete sessions against the backend
    - Keep the local directory and the persisted active id in step with it
    - Send messages with an optimistic user entry
    - Publish a snapshot to subscribers after every state change

    Only one operation runs at a time. A call made while `pending` is set is
    ignored. Backend failures never escape: they end up in the transcript, in
    the log, or on the error channel (`errors` / `drain_errors()`).
    """

    def __init__(
        self,
        backend: "BaseBackend",
        store: "PersistenceAdapter",
        directory: Optional[SessionDirectory] = None
    ):
        """
        Args:
            backend: Remote news assistant API
            store: Local key-value store for the active id and the directory
            directory: Directory to use; built on `store` if omitted
        """
        self.backend = backend
        self.store = store
        self.directory = directory or SessionDirectory(store)

        self.status = ControllerStatus.UNINITIALIZED
        self.active_session_id: Optional[str] = None
        self.transcript: List[Message] = []
        self.pending = False

        self._errors: List[NewsAssistError] = []
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def snapshot(self) -> ControllerSnapshot:
        return ControllerSnapshot(
            status=self.status,
            active_session_id=self.active_session_id,
            transcript=[message.model_copy(deep=True) for message in self.transcript],
            pending=self.pending,
            directory=self.directory.entries,
            last_error=self._errors[-1].message if self._errors else None,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with a fresh snapshot after each state change.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def errors(self) -> List[NewsAssistError]:
        return list(self._errors)

    def drain_errors(self) -> List[NewsAssistError]:
        """Return surfaced errors not yet consumed and clear them."""
        drained, self._errors = self._errors, []
        if drained:
            self._notify()
        return drained

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception(f"Snapshot listener {listener!r} failed")

    def _surface(self, error: NewsAssistError, cause: BackendError) -> None:
        error.__cause__ = cause
        self._errors.append(error)
        logger.warning(f"{type(error).__name__}: {error.message} ({cause.message})")
        self._notify()

    # ------------------------------------------------------------------
    # Mutual exclusion
    # ------------------------------------------------------------------

    def _is_busy(self, operation: str) -> bool:
        if self.pending:
            logger.info(f"Ignoring {operation}: another operation is in flight")
            return True
        return False

    def _begin(self) -> None:
        self.pending = True
        self._notify()

    def _end(self) -> None:
        self.pending = False
        self._notify()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """
        Restore the persisted session, or start a new one on first run.

        Runs once; later calls are ignored. Ends in READY whatever the backend does.
        """
        if self.status is not ControllerStatus.UNINITIALIZED:
            logger.debug(f"initialize called in state {self.status.value}, ignoring")
            return
        if self._is_busy("initialize"):
            return

        self.status = ControllerStatus.INITIALIZING
        self._begin()
        try:
            self.directory.load()
            stored_id = self.store.get(ACTIVE_SESSION_KEY)

            if stored_id:
                if not self.directory.contains(stored_id):
                    logger.warning(f"Persisted session {stored_id} missing from directory, re-adding it")
                    self.directory.add_session(Session(id=stored_id))
                self.active_session_id = stored_id
                logger.info(f"Restoring session: {stored_id}")
                self._notify()
                await self._fetch_history(stored_id)
            else:
                logger.info("No persisted session, creating one")
                await self._create_session()
        finally:
            self.status = ControllerStatus.READY
            self._end()

    async def create_session(self) -> Optional[str]:
        """
        Start a new chat and make it active.

        Returns:
            The new session id, or None if the call was ignored or failed
        """
        if self._is_busy("create_session"):
            return None

        self._begin()
        try:
            return await self._create_session()
        finally:
            self._end()

    async def load_session(self, session_id: str) -> None:
        """
        Switch to another known session and load its history.

        The switch sticks even if the history fetch fails.

        Raises:
            ValidationError: session_id is not in the directory
        """
        if self._is_busy("load_session"):
            return
        if session_id == self.active_session_id:
            return
        if not self.directory.contains(session_id):
            raise ValidationError(f"Unknown session: {session_id}")

        self._begin()
        try:
            await self._switch_to(session_id)
        finally:
            self._end()

    async def delete_session(self, session_id: str) -> None:
        """
        Delete a session on the server and drop it from the directory.

        The server call is best effort: local removal happens even when it
        fails. Deleting the active session switches to the first remaining one.

        Raises:
            LastSessionError: fewer than two sessions are known
            ValidationError: session_id is not in the directory
        """
        if self._is_busy("delete_session"):
            return
        if len(self.directory) < 2:
            raise LastSessionError()
        if not self.directory.contains(session_id):
            raise ValidationError(f"Unknown session: {session_id}")

        self._begin()
        try:
            try:
                await self.backend.delete_session(session_id)
            except BackendError as e:
                self._surface(
                    SessionDeleteError(f"Server could not delete session {session_id}; removed locally"),
                    cause=e,
                )

            remaining = self.directory.remove(session_id)
            logger.info(f"Deleted session {session_id}, {len(remaining)} remaining")
            self._notify()

            if session_id == self.active_session_id:
                await self._switch_to(self.directory.first().id)
        finally:
            self._end()

    async def reset_active_session(self) -> None:
        """
        Clear the active session's server-side history and show the greeting again.

        The local reset happens even if the server call fails.

        Raises:
            ValidationError: there is no active session
        """
        if self._is_busy("reset_active_session"):
            return
        if not self.active_session_id:
            raise ValidationError("No active session to reset")

        session_id = self.active_session_id
        self._begin()
        try:
            try:
                await self.backend.delete_session(session_id)
            except BackendError as e:
                logger.warning(f"Reset of session {session_id} failed on the server: {e.message}")

            self.transcript = [greeting_message()]
            logger.info(f"Reset session {session_id}")
            self._notify()
        finally:
            self._end()

    async def send_message(self, text: str) -> Optional[Message]:
        """
        Send a user message in the active session.

        The user message is appended right away and is never rolled back. On
        failure a fixed apology takes the place of the answer.

        Args:
            text: Message text; surrounding whitespace is stripped

        Returns:
            The appended assistant message, or None if the call was ignored

        Raises:
            ValidationError: no active session, or text is blank
        """
        if self._is_busy("send_message"):
            return None
        if not self.active_session_id:
            raise ValidationError("No active session")
        content = (text or "").strip()
        if not content:
            raise ValidationError("Message must not be empty")

        session_id = self.active_session_id
        self._begin()
        try:
            self.transcript.append(Message(role="user", content=content))
            self._notify()

            try:
                reply = await self.backend.send_message(session_id, content)
            except BackendError as e:
                logger.warning(f"Message to session {session_id} failed: {e.message}")
                message = apology_message()
            else:
                message = Message(role="assistant", content=reply.answer, sources=reply.sources)
                logger.info(f"Answer received: {len(reply.answer)} chars, {len(reply.sources)} sources")

            self.transcript.append(message)
            return message
        finally:
            self._end()

    # ------------------------------------------------------------------
    # Steps shared by the intents (callers hold `pending`)
    # ------------------------------------------------------------------

    async def _create_session(self) -> Optional[str]:
        try:
            created = await self.backend.create_session()
        except BackendError as e:
            self._surface(SessionCreateError("Could not start a new chat"), cause=e)
            return None

        # No await from here on: the new id reaches the directory before anyone can look
        session = Session(id=created.session_id)
        self._set_active(session.id)
        self.transcript = [greeting_message()]
        self.directory.add_session(session)

        logger.info(f"Created new session: {session.id}")
        self._notify()
        return session.id

    async def _switch_to(self, session_id: str) -> None:
        self._set_active(session_id)
        logger.info(f"Switched to session: {session_id}")
        self._notify()
        await self._fetch_history(session_id)

    async def _fetch_history(self, session_id: str) -> bool:
        try:
            response = await self.backend.fetch_history(session_id)
        except BackendError as e:
            self._surface(HistoryFetchError(f"Could not load history for session {session_id}"), cause=e)
            return False

        if response.history:
            self.transcript = list(response.history)
        else:
            self.transcript = [greeting_message()]

        logger.debug(f"Loaded {len(response.history)} messages for session {session_id}")
        self._notify()
        return True

    def _set_active(self, session_id: str) -> None:
        self.active_session_id = session_id
        self.store.set(ACTIVE_SESSION_KEY, session_id)

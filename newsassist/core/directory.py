from datetime import datetime
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError as SchemaError

from newsassist.core.errors import LastSessionError
from newsassist.core.schemas import Session, SessionDirectoryEntry
from newsassist.storage.base import DIRECTORY_KEY, PersistenceAdapter
from newsassist.utils.logger import get_logger
from newsassist.utils.config import get_config

logger = get_logger(__name__)

_entries_adapter = TypeAdapter(List[SessionDirectoryEntry])


def format_label(when: Optional[datetime] = None) -> str:
    """Directory label for a session created at `when` (defaults to now)."""
    when = when or datetime.now()
    return when.strftime(get_config().SESSION_LABEL_FORMAT)


class SessionDirectory:
    """
    Ordered, persisted list of sessions known to this client, most recent first.

    Entries are unique by id. Every mutation writes the whole list back under
    the "chat_history_list" key.
    """

    def __init__(self, store: PersistenceAdapter):
        self.store = store
        self._entries: Optional[List[SessionDirectoryEntry]] = None

    @property
    def entries(self) -> List[SessionDirectoryEntry]:
        if self._entries is None:
            self.load()
        return list(self._entries)

    def __len__(self) -> int:
        return len(self.entries)

    def load(self) -> List[SessionDirectoryEntry]:
        """
        (Re)read the directory from the store.

        Returns:
            The entries, or an empty list if nothing usable is stored
        """
        raw = self.store.get(DIRECTORY_KEY)
        entries: List[SessionDirectoryEntry] = []

        if raw:
            try:
                entries = _entries_adapter.validate_json(raw)
            except SchemaError as e:
                logger.warning(f"Discarding unparseable session directory: {e.error_count()} error(s)")
                entries = []

        seen = set()
        unique = []
        for entry in entries:
            if entry.id in seen:
                continue
            seen.add(entry.id)
            unique.append(entry)

        self._entries = unique
        logger.debug(f"Loaded session directory: {len(unique)} entries")
        return list(unique)

    def prepend(self, entry: SessionDirectoryEntry) -> None:
        """Insert entry at the front, moving any existing entry with the same id."""
        entries = [e for e in self.entries if e.id != entry.id]
        entries.insert(0, entry)
        self._save(entries)

    def add_session(self, session: Session) -> SessionDirectoryEntry:
        entry = SessionDirectoryEntry(id=session.id, label=format_label(session.created_at))
        self.prepend(entry)
        return entry

    def remove(self, session_id: str) -> List[SessionDirectoryEntry]:
        """
        Remove an entry.

        Raises:
            LastSessionError: if it is the only entry

        Returns:
            The updated entries
        """
        entries = self.entries
        if len(entries) == 1 and entries[0].id == session_id:
            raise LastSessionError()

        updated = [e for e in entries if e.id != session_id]
        if len(updated) != len(entries):
            self._save(updated)
        return list(updated)

    def contains(self, session_id: str) -> bool:
        return any(e.id == session_id for e in self.entries)

    def first(self) -> Optional[SessionDirectoryEntry]:
        entries = self.entries
        return entries[0] if entries else None

    def _save(self, entries: List[SessionDirectoryEntry]) -> None:
        self._entries = list(entries)
        self.store.set(DIRECTORY_KEY, _entries_adapter.dump_json(self._entries).decode("utf-8"))

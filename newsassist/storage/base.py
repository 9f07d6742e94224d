from abc import ABC, abstractmethod
from typing import Optional

ACTIVE_SESSION_KEY = "chat_session_id"
DIRECTORY_KEY = "chat_history_list"


class PersistenceAdapter(ABC):
    """
    Durable key -> string store.

    Implementations never raise to the caller: read failures come back as None,
    write failures are logged and dropped.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key."""
        pass

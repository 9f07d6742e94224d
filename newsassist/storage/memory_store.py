from typing import Dict, Optional

from newsassist.storage.base import PersistenceAdapter


class InMemoryStore(PersistenceAdapter):
    """Dict-backed store. Lives as long as the object does."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

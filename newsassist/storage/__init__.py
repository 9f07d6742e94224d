"""Local persistence: adapter interface, JSON file store, in-memory store."""

from .base import PersistenceAdapter, ACTIVE_SESSION_KEY, DIRECTORY_KEY
from .json_store import JsonFileStore
from .memory_store import InMemoryStore

__all__ = [
    "PersistenceAdapter",
    "ACTIVE_SESSION_KEY",
    "DIRECTORY_KEY",
    "JsonFileStore",
    "InMemoryStore",
]

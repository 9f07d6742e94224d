import json
import os
from pathlib import Path
from typing import Dict, Optional

from newsassist.storage.base import PersistenceAdapter
from newsassist.utils.logger import get_logger
from newsassist.utils.config import get_config

logger = get_logger(__name__)


class JsonFileStore(PersistenceAdapter):
    """
    Key-value store kept in a single JSON object file.

    The whole file is read on every get and rewritten on every set, so other
    processes sharing the file see changes immediately. A missing, unreadable
    or malformed file reads as empty.
    """

    def __init__(self, path: Optional[str] = None):
        """
        Args:
            path: File location. Defaults to config.STORE_PATH
        """
        self.path = Path(path or get_config().STORE_PATH)

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            logger.warning(f"Ignoring non-string value for '{key}' in {self.path}")
            return None
        return value

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
            logger.debug(f"Stored '{key}' in {self.path}")
        except OSError as e:
            logger.error(f"Failed to write '{key}' to {self.path}: {e}")

    def _read_all(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read state file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"State file {self.path} does not hold a JSON object, ignoring it")
            return {}
        return data

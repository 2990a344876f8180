"""
Persisted key/value storage for settings.

Values are strings at rest, one entry per setting. Typing happens in the
cells layered on top, so a storage backend never interprets what it holds.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, List, Union
from pathlib import Path
import json
import logging
import os
import tempfile

# Setup logging
logger = logging.getLogger(__name__)


class SettingsStorage(ABC):
    """Abstract base class for settings backends."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the stored string for a key, or None if it was never written."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a string under a key."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Forget a key. Removing a missing key is a no-op."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """Get all stored keys."""
        pass


class MemoryStorage(SettingsStorage):
    """In-process storage, used for tests and throwaway sessions."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._values)


class JsonFileStorage(SettingsStorage):
    """
    Storage backed by a flat JSON object on disk.

    Every write is persisted immediately. A missing file is an empty store;
    an unreadable or corrupt file is logged and also treated as empty.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the storage.

        Args:
            path: Settings file location. Parent directories are created on first write.
        """
        self.path = Path(path)
        self._values: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable settings file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self.path}: expected a JSON object")
            return {}

        # Hand-edited files may hold JSON literals; keep their JSON spelling
        return {
            str(key): value if isinstance(value, str) else json.dumps(value)
            for key, value in data.items()
        }

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".settings-", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(self._values, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._save()

    def remove(self, key: str) -> None:
        if key in self._values:
            del self._values[key]
            self._save()

    def keys(self) -> List[str]:
        return list(self._values)

"""
MedGuide Storage - Key/Value Persisted Slots

Backends holding text values under string keys.

Design:
- JsonFileStorage: one JSON object on disk (~/.medguide/storage.json)
- MemoryStorage: process-local dict, used in tests and as a fallback
- Values are opaque text; callers do their own serialization
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a storage backend cannot read or write"""
    pass


class MemoryStorage:
    """
    In-process key/value storage.

    Set `available = False` to simulate storage that is disabled or full.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})
        self.available = True

    def _check(self):
        if not self.available:
            raise StorageError("Storage is unavailable")

    def get_item(self, key: str) -> Optional[str]:
        self._check()
        return self._items.get(key)

    def set_item(self, key: str, value: str):
        self._check()
        self._items[key] = value

    def remove_item(self, key: str):
        self._check()
        self._items.pop(key, None)


class JsonFileStorage:
    """
    File-based key/value storage using JSON.

    Storage location: ~/.medguide/storage.json

    Philosophy:
    - User can inspect/edit file directly
    - Corruption is handled gracefully
    - Whole file is rewritten on every change
    """

    DEFAULT_STORAGE_DIR = Path.home() / ".medguide"
    DEFAULT_STORAGE_FILE = "storage.json"

    def __init__(self, storage_path: Optional[Path] = None):
        """
        Initialize file storage.

        Args:
            storage_path: Custom storage file path (default: ~/.medguide/storage.json)
        """
        if storage_path:
            self.storage_path = Path(storage_path)
        else:
            self.storage_path = self.DEFAULT_STORAGE_DIR / self.DEFAULT_STORAGE_FILE

        logger.info(f"JsonFileStorage initialized: {self.storage_path}")

    def _read_all(self) -> Dict[str, str]:
        """
        Read the whole key/value object.

        Returns an empty dict when the file is missing. A corrupted file
        is backed up and reset.

        Raises:
            StorageError: If the file exists but cannot be read
        """
        try:
            with open(self.storage_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Corrupted storage file: {e}")
            self._backup_and_reset()
            return {}
        except OSError as e:
            logger.error(f"Failed to read storage: {e}", exc_info=True)
            raise StorageError(f"Cannot read storage: {e}") from e

        if not isinstance(data, dict):
            logger.error("Storage file does not hold a JSON object")
            self._backup_and_reset()
            return {}

        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: Dict[str, str]):
        """
        Write the whole key/value object.

        Raises:
            StorageError: If storage cannot be written
        """
        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)

            # Write atomically (write to temp, then rename)
            temp_path = self.storage_path.with_suffix('.tmp')
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(items, f, indent=2)

            temp_path.replace(self.storage_path)

        except OSError as e:
            logger.error(f"Failed to write storage: {e}", exc_info=True)
            raise StorageError(f"Cannot write storage: {e}") from e

    def _backup_and_reset(self):
        """
        Backup corrupted file so the next write starts fresh.

        Called when JSON is corrupted or has the wrong shape.
        """
        backup_path = self.storage_path.with_suffix('.json.bak')

        try:
            if self.storage_path.exists():
                self.storage_path.replace(backup_path)
                logger.warning(f"Backed up corrupted storage to: {backup_path}")
        except OSError as e:
            logger.error(f"Failed to back up corrupted storage: {e}", exc_info=True)

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str):
        items = self._read_all()
        items[key] = value
        self._write_all(items)
        logger.debug(f"Stored {len(value)} chars under '{key}'")

    def remove_item(self, key: str):
        items = self._read_all()
        if items.pop(key, None) is not None:
            self._write_all(items)

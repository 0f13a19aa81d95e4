"""
MedGuide Reminder Store - In-Memory List with Persisted Snapshot

Owns the reminder list for the session and mirrors it to a key/value
storage slot after every change.

Design:
- In-memory list is authoritative for the session
- Every add/delete rewrites the whole snapshot (no diffs)
- Storage failures never block the user; they are recorded as warnings
- Explicit init()/dispose() lifecycle, no module-level store
"""

import json
import logging
from typing import Callable, Dict, List, Mapping, Optional

from .reminder_models import (
    Frequency,
    Reminder,
    ValidationError,
    new_reminder_id,
    normalize_name,
    normalize_time,
)
from .storage import StorageError

logger = logging.getLogger(__name__)

STORAGE_KEY = "medguide-medicines"


class ReminderStoreError(Exception):
    """Raised when the store is used outside its init/dispose lifecycle"""
    pass


class PersistenceWarning(Exception):
    """
    Non-fatal persistence failure.

    Recorded on the store and passed to the warning callback; never raised
    from add/delete/load.
    """

    def __init__(self, message: str, operation: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.operation = operation
        self.cause = cause


def serialize_reminders(reminders: List[Reminder]) -> str:
    """Serialize reminders to the snapshot text format"""
    return json.dumps([r.to_dict() for r in reminders])


class ReminderStore:
    """
    Session reminder list with a synchronized persisted snapshot.

    Usage:
        store = ReminderStore(JsonFileStorage())
        store.init()
        store.add({"name": "Paracetamol", "time": "08:00", "frequency": "daily"})
        store.dispose()
    """

    def __init__(
        self,
        storage,
        key: str = STORAGE_KEY,
        on_warning: Optional[Callable[[PersistenceWarning], None]] = None
    ):
        """
        Initialize reminder store.

        Args:
            storage: Backend with get_item/set_item (JsonFileStorage, MemoryStorage)
            key: Storage key holding the snapshot
            on_warning: Called with each PersistenceWarning as it happens
        """
        self.storage = storage
        self.key = key
        self.on_warning = on_warning
        self.warnings: List[PersistenceWarning] = []

        self._reminders: List[Reminder] = []
        self._active = False
        self._disposed = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self) -> 'ReminderStore':
        """Load the persisted snapshot once and start accepting changes"""
        if self._disposed:
            raise ReminderStoreError("Cannot re-initialize a disposed store")
        if not self._active:
            self._reminders = self.load()
            self._active = True
            logger.info(f"ReminderStore initialized with {len(self._reminders)} reminders")
        return self

    def dispose(self):
        """Release the in-memory list; the store cannot be used afterwards"""
        self._reminders = []
        self._active = False
        self._disposed = True
        logger.info("ReminderStore disposed")

    @property
    def is_active(self) -> bool:
        return self._active

    def _require_active(self):
        if not self._active:
            state = "disposed" if self._disposed else "not initialized"
            raise ReminderStoreError(f"ReminderStore is {state}")

    # ------------------------------------------------------------------
    # Warnings
    # ------------------------------------------------------------------

    def _warn(self, message: str, operation: str, cause: Optional[BaseException] = None):
        warning = PersistenceWarning(message, operation, cause)
        self.warnings.append(warning)
        logger.warning(message)

        if self.on_warning:
            try:
                self.on_warning(warning)
            except Exception as e:
                logger.error(f"Warning callback failed: {e}", exc_info=True)

    @property
    def last_warning(self) -> Optional[PersistenceWarning]:
        return self.warnings[-1] if self.warnings else None

    def clear_warnings(self):
        self.warnings.clear()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> List[Reminder]:
        """
        Read the persisted snapshot.

        Returns:
            Reminders in stored order; empty when there is no snapshot or it
            cannot be parsed. Never raises.
        """
        try:
            raw = self.storage.get_item(self.key)
        except StorageError as e:
            self._warn(f"Could not read saved reminders: {e}", "load", e)
            return []

        if raw is None:
            logger.debug("No saved reminders")
            return []

        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            self._warn(f"Saved reminders are corrupted and were ignored: {e}", "load", e)
            return []

        if not isinstance(data, list):
            self._warn(
                f"Saved reminders have unexpected shape ({type(data).__name__}) and were ignored",
                "load"
            )
            return []

        reminders = []
        seen_ids = set()
        skipped = 0
        for reminder_dict in data:
            try:
                reminder = Reminder.from_dict(reminder_dict)
            except ValidationError as e:
                logger.warning(f"Skipping invalid reminder: {e}")
                skipped += 1
                continue
            if reminder.id in seen_ids:
                logger.warning(f"Skipping duplicate reminder ID: {reminder.id}")
                skipped += 1
                continue
            seen_ids.add(reminder.id)
            reminders.append(reminder)

        if skipped:
            self._warn(f"Skipped {skipped} invalid saved reminder(s)", "load")

        logger.debug(f"Loaded {len(reminders)} reminders")
        return reminders

    def _save(self, operation: str):
        """Write the full snapshot; failures become PersistenceWarnings"""
        try:
            self.storage.set_item(self.key, serialize_reminders(self._reminders))
            logger.debug(f"Saved {len(self._reminders)} reminders")
        except StorageError as e:
            self._warn(f"Reminders could not be saved and will be lost on exit: {e}", operation, e)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def add(self, candidate: Mapping) -> Reminder:
        """
        Validate and append a new reminder, then persist.

        Args:
            candidate: Mapping with name, time and frequency

        Returns:
            The stored Reminder

        Raises:
            ValidationError: If any field is invalid (nothing is stored)
            ReminderStoreError: If the store is not active
        """
        self._require_active()

        name = normalize_name(candidate.get('name'))
        time = normalize_time(candidate.get('time'))
        frequency = Frequency.parse(candidate.get('frequency'))

        existing_ids = {r.id for r in self._reminders}
        reminder_id = new_reminder_id()
        while reminder_id in existing_ids:
            reminder_id = new_reminder_id()

        reminder = Reminder(id=reminder_id, name=name, time=time, frequency=frequency)
        self._reminders.append(reminder)
        self._save("add")

        logger.info(f"Added reminder: {reminder.id} - {reminder.name} at {reminder.time}")
        return reminder

    def delete(self, reminder_id: str):
        """
        Remove the reminder with this ID, then persist.

        Unknown IDs are ignored.
        """
        self._require_active()

        remaining = [r for r in self._reminders if r.id != reminder_id]
        if len(remaining) == len(self._reminders):
            logger.warning(f"Reminder {reminder_id} not found for deletion")
            return

        self._reminders = remaining
        self._save("delete")
        logger.info(f"Deleted reminder: {reminder_id}")

    def list(self) -> List[Reminder]:
        """Current reminders in insertion order (a new list)"""
        self._require_active()
        return list(self._reminders)

    def get(self, reminder_id: str) -> Optional[Reminder]:
        self._require_active()
        for reminder in self._reminders:
            if reminder.id == reminder_id:
                return reminder
        return None

    def __len__(self) -> int:
        self._require_active()
        return len(self._reminders)

    def stats(self) -> Dict[str, int]:
        """
        Get reminder counts.

        Returns:
            Dict with total and a count per frequency token
        """
        self._require_active()
        stats = {'total': len(self._reminders)}
        for frequency in Frequency:
            stats[frequency.value] = sum(1 for r in self._reminders if r.frequency == frequency)
        return stats

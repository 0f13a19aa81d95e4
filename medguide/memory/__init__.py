"""
MedGuide Memory - Medicine Reminders

Local reminder list with a persisted snapshot. No alarms, no scheduling.
"""

from .reminder_models import (
    Frequency,
    Reminder,
    ValidationError,
    create_reminder,
    normalize_time,
)
from .reminder_store import (
    STORAGE_KEY,
    PersistenceWarning,
    ReminderStore,
    ReminderStoreError,
    serialize_reminders,
)
from .storage import JsonFileStorage, MemoryStorage, StorageError

__all__ = [
    'Frequency',
    'Reminder',
    'ValidationError',
    'create_reminder',
    'normalize_time',
    'STORAGE_KEY',
    'PersistenceWarning',
    'ReminderStore',
    'ReminderStoreError',
    'serialize_reminders',
    'JsonFileStorage',
    'MemoryStorage',
    'StorageError',
]

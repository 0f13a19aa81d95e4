"""
MedGuide Reminder Service - User-Facing Reminder Actions

Responsibilities:
- Turn form input into store calls
- Handle every failure at the action that caused it
- Report results as Notices (success, validation error, save warning)
- NO scheduling, NO alarms

This is a thin service over ReminderStore, not a second store.
"""

import logging
from typing import List, Optional

from medguide.memory.reminder_models import Reminder, ValidationError
from medguide.memory.reminder_store import ReminderStore
from .notice import DESTRUCTIVE, WARNING, Notice

logger = logging.getLogger(__name__)


class ReminderService:
    """
    User-facing reminder actions.

    Design principles:
    - Validation errors are shown, never raised to the caller
    - Storage problems are shown as warnings next to the success notice
    - The store is passed in, never looked up globally
    """

    def __init__(self, store: ReminderStore):
        """
        Initialize reminder service.

        Args:
            store: Initialized ReminderStore
        """
        self.store = store
        logger.info("ReminderService initialized")

    def _warning_notices(self, since: int) -> List[Notice]:
        return [
            Notice("Not saved", str(w), WARNING)
            for w in self.store.warnings[since:]
        ]

    def add_reminder(self, name: str, time: str, frequency: str) -> List[Notice]:
        """
        Add a reminder from form input.

        Args:
            name: Medicine name
            time: Time to take, "HH:MM"
            frequency: once, daily or alternate

        Returns:
            Notices to show, success or error first, then any save warnings
        """
        since = len(self.store.warnings)
        try:
            reminder = self.store.add({'name': name, 'time': time, 'frequency': frequency})
        except ValidationError as e:
            logger.info(f"Rejected reminder input ({e.field}): {e}")
            return [Notice("Validation Error", "Please fill in all fields.", DESTRUCTIVE)]

        notices = [Notice("Success! 🎉", f"{reminder.name} reminder added successfully.")]
        return notices + self._warning_notices(since)

    def delete_reminder(self, reminder_id: str) -> List[Notice]:
        """
        Delete a reminder by ID.

        Returns:
            Notices to show; an unknown ID produces an informational notice
        """
        reminder = self.store.get(reminder_id)
        if reminder is None:
            logger.warning(f"Delete requested for unknown reminder {reminder_id}")
            return [Notice("Reminder not found", "It may already have been removed.")]

        since = len(self.store.warnings)
        self.store.delete(reminder_id)

        notices = [Notice("Reminder Deleted", f"{reminder.name} reminder has been removed.")]
        return notices + self._warning_notices(since)

    def list_reminders(self) -> List[Reminder]:
        return self.store.list()

    def get_reminder(self, reminder_id: str) -> Optional[Reminder]:
        return self.store.get(reminder_id)

    def summary(self) -> str:
        """Heading text for the reminder list"""
        count = len(self.store)
        if count == 0:
            return "No reminders yet"
        return f"You have {count} active reminder{'s' if count != 1 else ''}"

    def format_reminder(self, reminder: Reminder) -> str:
        """
        Format reminder for display.

        Args:
            reminder: Reminder to format

        Returns:
            One line, e.g. "Paracetamol - 8:00 AM (Daily)"
        """
        return f"{reminder.name} - {reminder.display_time} ({reminder.frequency.label})"

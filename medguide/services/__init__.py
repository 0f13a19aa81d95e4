"""
MedGuide Services - Actions Behind the View

Each action handles its own failures and reports them as Notices.
"""

from .lookup_service import LookupService
from .notice import Notice
from .reminder_service import ReminderService

__all__ = [
    'LookupService',
    'Notice',
    'ReminderService',
]

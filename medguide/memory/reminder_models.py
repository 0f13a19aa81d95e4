"""
MedGuide Reminder Models

Data structures for medicine reminders.

Philosophy:
- A reminder is a schedule note, not an alarm
- Created once, never edited
- Validation happens before anything is stored
"""

from dataclasses import dataclass
from datetime import time as dt_time
from enum import Enum
from typing import Any, Dict, Union
import re
import uuid


class ValidationError(ValueError):
    """Raised when user input fails a reminder field constraint"""

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field


class Frequency(Enum):
    """How often the medicine is taken (informational only)"""
    ONCE = "once"
    DAILY = "daily"
    ALTERNATE = "alternate"

    @property
    def label(self) -> str:
        return _FREQUENCY_LABELS[self]

    @classmethod
    def parse(cls, value: Union[str, "Frequency", None]) -> "Frequency":
        """
        Resolve a frequency token.

        Raises:
            ValidationError: If value is missing or not a known token
        """
        if isinstance(value, Frequency):
            return value
        if not value or not str(value).strip():
            raise ValidationError("Frequency is required", field="frequency")
        token = str(value).strip().lower()
        try:
            return cls(token)
        except ValueError:
            raise ValidationError(
                f"Unknown frequency '{value}' (expected once, daily or alternate)",
                field="frequency"
            ) from None


_FREQUENCY_LABELS = {
    Frequency.ONCE: "Once only",
    Frequency.DAILY: "Daily",
    Frequency.ALTERNATE: "Every other day",
}

_TIME_PATTERN = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")


def normalize_time(value: Union[str, dt_time, None]) -> str:
    """
    Normalize a time-of-day to zero-padded 24-hour HH:MM.

    Accepts "8:05", "08:05" or a datetime.time.

    Raises:
        ValidationError: If value is empty or not a valid time of day
    """
    if isinstance(value, dt_time):
        return value.strftime("%H:%M")
    if value is None or not str(value).strip():
        raise ValidationError("Time is required", field="time")

    match = _TIME_PATTERN.match(str(value).strip())
    if not match:
        raise ValidationError(f"Invalid time '{value}' (expected HH:MM)", field="time")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValidationError(f"Invalid time '{value}' (expected HH:MM)", field="time")

    return f"{hour:02d}:{minute:02d}"


def normalize_name(value: Any) -> str:
    """Trim a medicine name, rejecting empty or whitespace-only input"""
    if value is None or not str(value).strip():
        raise ValidationError("Medicine name cannot be empty", field="name")
    return str(value).strip()


@dataclass(frozen=True)
class Reminder:
    """
    A single medicine reminder.

    Frozen: there is no edit operation, a reminder is only ever added
    or deleted.
    """
    id: str
    name: str
    time: str  # "HH:MM", 24-hour
    frequency: Frequency

    def __post_init__(self):
        """Validate reminder data"""
        if not self.id:
            raise ValidationError("Reminder ID cannot be empty", field="id")
        if not self.name or not self.name.strip():
            raise ValidationError("Medicine name cannot be empty", field="name")
        if not isinstance(self.frequency, Frequency):
            raise ValidationError("frequency must be Frequency", field="frequency")
        if normalize_time(self.time) != self.time:
            raise ValidationError(f"Invalid time '{self.time}' (expected HH:MM)", field="time")

    @property
    def display_time(self) -> str:
        """12-hour clock form, e.g. '8:00 AM'"""
        hour, minute = (int(part) for part in self.time.split(":"))
        suffix = "AM" if hour < 12 else "PM"
        return f"{hour % 12 or 12}:{minute:02d} {suffix}"

    def to_dict(self) -> Dict[str, str]:
        """Convert to JSON-serializable dict"""
        return {
            'id': self.id,
            'name': self.name,
            'time': self.time,
            'frequency': self.frequency.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Reminder':
        """
        Create Reminder from a persisted dict.

        Raises:
            ValidationError: If any field is missing or invalid
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Expected an object, got {type(data).__name__}")
        if not isinstance(data.get('id'), str):
            raise ValidationError("Reminder ID must be a string", field="id")
        return cls(
            id=data['id'],
            name=normalize_name(data.get('name')),
            time=normalize_time(data.get('time')),
            frequency=Frequency.parse(data.get('frequency')),
        )


def new_reminder_id() -> str:
    return uuid.uuid4().hex


def create_reminder(name: str, time: Union[str, dt_time], frequency: Union[str, Frequency]) -> Reminder:
    """
    Factory function to create a new reminder from raw user input.

    Args:
        name: Medicine name (trimmed)
        time: Time of day, "HH:MM"
        frequency: once, daily or alternate

    Returns:
        New Reminder with a fresh ID

    Raises:
        ValidationError: If any field is invalid
    """
    return Reminder(
        id=new_reminder_id(),
        name=normalize_name(name),
        time=normalize_time(time),
        frequency=Frequency.parse(frequency),
    )

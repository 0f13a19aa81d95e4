"""
MedGuide Notices - User-Visible Messages

Every user action ends in a Notice; nothing is allowed to crash the view.
"""

from dataclasses import dataclass

DEFAULT = "default"
DESTRUCTIVE = "destructive"
WARNING = "warning"


@dataclass(frozen=True)
class Notice:
    title: str
    description: str = ""
    variant: str = DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == DESTRUCTIVE

    def __str__(self) -> str:
        if self.description:
            return f"{self.title}: {self.description}"
        return self.title

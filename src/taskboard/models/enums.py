"""Enums for card priority, card status and advisory records."""

from enum import Enum


class _DisplayEnum(str, Enum):
    """String enum whose values are display labels, matched case-insensitively."""

    @classmethod
    def _missing_(cls, value: object) -> "_DisplayEnum | None":
        if isinstance(value, str):
            wanted = value.strip().replace("_", " ").lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return None

    @classmethod
    def choices(cls) -> list[str]:
        """Display values in declaration order."""
        return [member.value for member in cls]


class Priority(_DisplayEnum):
    """Priority levels for cards."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Status(_DisplayEnum):
    """Workflow status of a card."""

    BACKLOG = "Backlog"
    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    REVIEW = "Review"
    DONE = "Done"
    BLOCKED = "Blocked"


class Severity(str, Enum):
    """Severity of an advisory."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> int:
        """Ranking weight (higher sorts first)."""
        return _SEVERITY_WEIGHTS[self]


_SEVERITY_WEIGHTS = {
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
}


class AdvisoryType(str, Enum):
    """Kinds of advisories produced by the recommendation engine."""

    CRITICAL_PRIORITY = "critical_priority"
    HIGH_PRIORITY_WAITING = "high_priority_waiting"
    NO_DUE_DATE_HIGH_PRIORITY = "no_due_date_high_priority"
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    UPCOMING_DEADLINE = "upcoming_deadline"
    IN_PROGRESS_OVERDUE = "in_progress_overdue"
    IN_PROGRESS_DUE_SOON = "in_progress_due_soon"
    BLOCKED_TASK = "blocked_task"
    CRITICAL_IN_TODO = "critical_in_todo"
    MOVE_TO_DONE = "move_to_done"

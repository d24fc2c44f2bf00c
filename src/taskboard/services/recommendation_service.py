"""Rule-based recommendations over a board's cards."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import datetime

from ..models import (
    Advisory,
    AdvisoryType,
    BoardAggregate,
    Card,
    ListAggregate,
    Priority,
    Severity,
    Status,
)
from ..utils import days_until, now_utc

logger = logging.getLogger(__name__)

DUE_SOON_DAYS = 2
UPCOMING_DEADLINE_DAYS = 7
IN_PROGRESS_DUE_SOON_DAYS = 1


def _advisory(
    card: Card, kind: AdvisoryType, reason: str, severity: Severity, action: str
) -> Advisory:
    return Advisory(
        card_id=card.id,
        card_title=card.title,
        type=kind,
        reason=reason,
        severity=severity,
        action=action,
    )


class RecommendationEngine:
    """
    Scans a fully loaded board and produces ranked advisories.

    Four independent rule groups run once per card: alerts, priority, due
    date and status. Their results are concatenated in that order and
    stably sorted by severity, so ties keep group order, then card order.
    """

    def __init__(self, clock: Callable[[], datetime] = now_utc) -> None:
        self._clock = clock

    def evaluate(self, aggregate: BoardAggregate) -> list[Advisory]:
        """Return advisories for every card on the board, highest severity first."""
        if not aggregate.lists:
            return []

        now = self._clock()
        alerts: list[Advisory] = []
        priority: list[Advisory] = []
        due_date: list[Advisory] = []
        status: list[Advisory] = []

        for card in aggregate.iter_cards():
            days = self._days_until_due(card, now)
            current = aggregate.list_containing(card.id)

            priority.extend(self._priority_rules(card, aggregate))
            due_date.extend(self._due_date_rules(card, days))
            status.extend(self._status_rules(card, days))
            alerts.extend(self._alert_rules(card, current, aggregate))

        combined = [*alerts, *priority, *due_date, *status]
        ranked = sorted(combined, key=lambda adv: adv.severity.weight, reverse=True)

        logger.debug(
            "Board %s: %d advisories (alerts=%d priority=%d due_date=%d status=%d)",
            aggregate.id,
            len(ranked),
            len(alerts),
            len(priority),
            len(due_date),
            len(status),
        )
        return ranked

    def _days_until_due(self, card: Card, now: datetime) -> int | None:
        """Days until the card is due, or None if it has no usable due date."""
        due = card.due_date
        if not isinstance(due, datetime):
            return None
        try:
            return days_until(due, now)
        except (TypeError, ValueError, OverflowError):
            logger.warning("Card %s has an unusable due date, treating as unset", card.id)
            return None

    # --- Rule groups ---

    def _priority_rules(self, card: Card, aggregate: BoardAggregate) -> Iterator[Advisory]:
        if card.priority == Priority.CRITICAL:
            in_progress = aggregate.lists_matching("in progress")
            if in_progress and not any(lst.contains(card.id) for lst in in_progress):
                yield _advisory(
                    card,
                    AdvisoryType.CRITICAL_PRIORITY,
                    "Critical priority task should be in progress immediately",
                    Severity.HIGH,
                    'Move to "In Progress" list',
                )

        if card.priority == Priority.HIGH:
            waiting = aggregate.lists_matching("todo", "backlog")
            if any(lst.contains(card.id) for lst in waiting):
                yield _advisory(
                    card,
                    AdvisoryType.HIGH_PRIORITY_WAITING,
                    "High priority task is waiting in backlog",
                    Severity.MEDIUM,
                    'Consider moving to "In Progress" if resources allow',
                )

    def _due_date_rules(self, card: Card, days: int | None) -> Iterator[Advisory]:
        critical = card.priority == Priority.CRITICAL

        if days is None:
            if card.priority in (Priority.CRITICAL, Priority.HIGH):
                yield _advisory(
                    card,
                    AdvisoryType.NO_DUE_DATE_HIGH_PRIORITY,
                    f"{card.priority.value} priority task has no due date",
                    Severity.MEDIUM if critical else Severity.LOW,
                    "Set a realistic due date for proper planning",
                )
        elif days < 0:
            if card.status != Status.DONE:
                yield _advisory(
                    card,
                    AdvisoryType.OVERDUE,
                    f"Task was due {abs(days)} day(s) ago but is not completed",
                    Severity.HIGH if critical else Severity.MEDIUM,
                    "Resolve blocking issues and complete task"
                    if card.status == Status.BLOCKED
                    else "Complete task immediately",
                )
        elif days <= DUE_SOON_DAYS:
            if card.status not in (Status.DONE, Status.IN_PROGRESS):
                yield _advisory(
                    card,
                    AdvisoryType.DUE_SOON,
                    f"Task is due in {days} day(s) but not yet in progress",
                    Severity.HIGH if critical else Severity.MEDIUM,
                    'Move to "In Progress" and prioritize completion',
                )
        elif days <= UPCOMING_DEADLINE_DAYS and card.status == Status.BACKLOG:
            yield _advisory(
                card,
                AdvisoryType.UPCOMING_DEADLINE,
                f"Task due in {days} days is still in backlog",
                Severity.LOW,
                "Consider starting work or adjusting timeline",
            )

    def _status_rules(self, card: Card, days: int | None) -> Iterator[Advisory]:
        if card.status == Status.IN_PROGRESS and days is not None:
            if days < 0:
                yield _advisory(
                    card,
                    AdvisoryType.IN_PROGRESS_OVERDUE,
                    "Task is in progress but past due date",
                    Severity.HIGH,
                    "Complete immediately or escalate",
                )
            elif days <= IN_PROGRESS_DUE_SOON_DAYS:
                yield _advisory(
                    card,
                    AdvisoryType.IN_PROGRESS_DUE_SOON,
                    f"In progress task due in {days} day(s)",
                    Severity.MEDIUM,
                    "Focus on completing this task",
                )

        if card.status == Status.BLOCKED:
            yield _advisory(
                card,
                AdvisoryType.BLOCKED_TASK,
                "Task is blocked and needs attention",
                Severity.MEDIUM,
                "Identify and resolve blocking issues",
            )

        if card.status == Status.TODO and card.priority == Priority.CRITICAL:
            yield _advisory(
                card,
                AdvisoryType.CRITICAL_IN_TODO,
                "Critical priority task should not remain in Todo",
                Severity.HIGH,
                'Move to "In Progress" immediately',
            )

    def _alert_rules(
        self, card: Card, current: ListAggregate | None, aggregate: BoardAggregate
    ) -> Iterator[Advisory]:
        # A card no list references has no current list to compare against
        if card.status != Status.DONE or current is None:
            return
        if current.name_contains("done"):
            return
        if aggregate.lists_matching("done", "complete"):
            yield _advisory(
                card,
                AdvisoryType.MOVE_TO_DONE,
                "Completed task should be moved to Done list",
                Severity.LOW,
                "Move to completed tasks list",
            )

"""Tests for the recommendation engine rules and ranking."""

from datetime import UTC, datetime, timedelta

import pytest

from taskboard.models import (
    AdvisoryType,
    Board,
    BoardAggregate,
    BoardList,
    Card,
    ListAggregate,
    Priority,
    Severity,
    Status,
)
from taskboard.services import RecommendationEngine

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def engine() -> RecommendationEngine:
    return RecommendationEngine(clock=lambda: NOW)


def card(title: str = "Card", **kwargs) -> Card:
    return Card(title=title, list_id="unset", created_by="owner", **kwargs)


def board_of(*lists: tuple[str, list[Card]]) -> BoardAggregate:
    """Build an aggregate from (list name, cards) pairs."""
    board = Board(name="Board", owner_id="owner")
    aggregates = []
    for position, (name, cards) in enumerate(lists):
        record = BoardList(
            name=name, board_id=board.id, position=position, card_ids=[c.id for c in cards]
        )
        board.list_ids.append(record.id)
        aggregates.append(ListAggregate(record=record, cards=cards))
    return BoardAggregate(board=board, lists=aggregates)


def types_for(advisories, card_id: str) -> list[AdvisoryType]:
    return [a.type for a in advisories if a.card_id == card_id]


class TestEdgeCases:
    def test_board_without_lists(self, engine: RecommendationEngine):
        assert engine.evaluate(board_of()) == []

    def test_lists_without_cards(self, engine: RecommendationEngine):
        assert engine.evaluate(board_of(("Todo", []), ("Done", []))) == []

    def test_unparseable_due_date_treated_as_missing(self, engine: RecommendationEngine):
        c = card(priority=Priority.HIGH, due_date="sometime soon")
        result = engine.evaluate(board_of(("Review", [c])))
        assert types_for(result, c.id) == [AdvisoryType.NO_DUE_DATE_HIGH_PRIORITY]

    def test_card_not_referenced_by_any_list(self, engine: RecommendationEngine):
        """A Done card no list references skips the move-to-done alert."""
        orphan = card(status=Status.DONE)
        aggregate = board_of(("Review", []), ("Done", []))
        aggregate.lists[0].cards.append(orphan)
        assert engine.evaluate(aggregate) == []


class TestPriorityRules:
    def test_critical_in_backlog_with_in_progress_list(self, engine: RecommendationEngine):
        c = card(priority=Priority.CRITICAL, status=Status.BACKLOG)
        result = engine.evaluate(board_of(("Backlog", [c]), ("In Progress", [])))

        critical = [a for a in result if a.type == AdvisoryType.CRITICAL_PRIORITY]
        assert len(critical) == 1
        assert critical[0].severity == Severity.HIGH
        assert critical[0].card_title == c.title

    def test_critical_already_in_progress(self, engine: RecommendationEngine):
        c = card(priority=Priority.CRITICAL, status=Status.IN_PROGRESS)
        result = engine.evaluate(board_of(("Backlog", []), ("In progress", [c])))
        assert AdvisoryType.CRITICAL_PRIORITY not in types_for(result, c.id)

    def test_critical_without_in_progress_list(self, engine: RecommendationEngine):
        c = card(priority=Priority.CRITICAL, status=Status.BACKLOG)
        result = engine.evaluate(board_of(("Backlog", [c]), ("Done", [])))
        assert AdvisoryType.CRITICAL_PRIORITY not in types_for(result, c.id)

    def test_high_priority_waiting_in_todo(self, engine: RecommendationEngine):
        c = card(priority=Priority.HIGH, due_date=NOW + timedelta(days=20))
        result = engine.evaluate(board_of(("To Do / todo", [c])))
        assert types_for(result, c.id) == [AdvisoryType.HIGH_PRIORITY_WAITING]
        assert result[0].severity == Severity.MEDIUM

    def test_high_priority_in_second_backlog_list(self, engine: RecommendationEngine):
        """Any list whose name matches counts, not only the first."""
        c = card(priority=Priority.HIGH, due_date=NOW + timedelta(days=20))
        result = engine.evaluate(board_of(("Todo", []), ("Backlog", [c])))
        assert types_for(result, c.id) == [AdvisoryType.HIGH_PRIORITY_WAITING]


class TestDueDateRules:
    def test_overdue_yesterday_todo_medium(self, engine: RecommendationEngine):
        c = card(priority=Priority.MEDIUM, status=Status.TODO, due_date=NOW - timedelta(days=1))
        result = engine.evaluate(board_of(("Review", [c])))

        assert len(result) == 1
        assert result[0].type == AdvisoryType.OVERDUE
        assert result[0].severity == Severity.MEDIUM
        assert result[0].reason == "Task was due 1 day(s) ago but is not completed"
        assert result[0].action == "Complete task immediately"

    def test_overdue_critical_is_high(self, engine: RecommendationEngine):
        c = card(priority=Priority.CRITICAL, status=Status.REVIEW, due_date=NOW - timedelta(days=3))
        result = engine.evaluate(board_of(("Review", [c])))
        assert result[0].type == AdvisoryType.OVERDUE
        assert result[0].severity == Severity.HIGH

    def test_overdue_blocked_action(self, engine: RecommendationEngine):
        c = card(status=Status.BLOCKED, due_date=NOW - timedelta(days=2))
        result = engine.evaluate(board_of(("Review", [c])))
        overdue = next(a for a in result if a.type == AdvisoryType.OVERDUE)
        assert overdue.action == "Resolve blocking issues and complete task"
        assert AdvisoryType.BLOCKED_TASK in types_for(result, c.id)

    def test_overdue_done_is_quiet(self, engine: RecommendationEngine):
        c = card(status=Status.DONE, due_date=NOW - timedelta(days=2))
        assert engine.evaluate(board_of(("Done", [c]))) == []

    def test_due_soon(self, engine: RecommendationEngine):
        c = card(status=Status.TODO, due_date=NOW + timedelta(days=1))
        result = engine.evaluate(board_of(("Review", [c])))
        assert types_for(result, c.id) == [AdvisoryType.DUE_SOON]
        assert result[0].reason == "Task is due in 1 day(s) but not yet in progress"

    def test_due_an_hour_ago_counts_as_today(self, engine: RecommendationEngine):
        """Days round up, so a few hours past due is still day 0."""
        c = card(status=Status.TODO, due_date=NOW - timedelta(hours=1))
        result = engine.evaluate(board_of(("Review", [c])))
        assert types_for(result, c.id) == [AdvisoryType.DUE_SOON]

    def test_due_soon_skipped_when_in_progress(self, engine: RecommendationEngine):
        c = card(status=Status.IN_PROGRESS, due_date=NOW + timedelta(days=2))
        result = engine.evaluate(board_of(("Doing", [c])))
        assert AdvisoryType.DUE_SOON not in types_for(result, c.id)

    def test_upcoming_deadline_in_backlog(self, engine: RecommendationEngine):
        c = card(status=Status.BACKLOG, due_date=NOW + timedelta(days=5))
        result = engine.evaluate(board_of(("Ideas", [c])))
        assert types_for(result, c.id) == [AdvisoryType.UPCOMING_DEADLINE]
        assert result[0].severity == Severity.LOW
        assert result[0].reason == "Task due in 5 days is still in backlog"

    @pytest.mark.parametrize("days,status", [(5, Status.TODO), (8, Status.BACKLOG)])
    def test_no_upcoming_deadline(self, engine: RecommendationEngine, days: int, status: Status):
        c = card(status=status, due_date=NOW + timedelta(days=days))
        assert engine.evaluate(board_of(("Ideas", [c]))) == []

    def test_no_due_date_severity_by_priority(self, engine: RecommendationEngine):
        crit = card("crit", priority=Priority.CRITICAL, status=Status.REVIEW)
        high = card("high", priority=Priority.HIGH)
        low = card("low", priority=Priority.LOW)
        result = engine.evaluate(board_of(("Review", [crit, high, low])))

        by_card = {a.card_id: a for a in result if a.type == AdvisoryType.NO_DUE_DATE_HIGH_PRIORITY}
        assert by_card[crit.id].severity == Severity.MEDIUM
        assert by_card[high.id].severity == Severity.LOW
        assert by_card[high.id].reason == "High priority task has no due date"
        assert low.id not in by_card

    def test_at_most_one_due_date_advisory(self, engine: RecommendationEngine):
        due_types = {
            AdvisoryType.NO_DUE_DATE_HIGH_PRIORITY,
            AdvisoryType.OVERDUE,
            AdvisoryType.DUE_SOON,
            AdvisoryType.UPCOMING_DEADLINE,
        }
        for offset in (-10, -1, 0, 1, 2, 3, 7, 8):
            c = card(priority=Priority.CRITICAL, status=Status.BACKLOG, due_date=NOW + timedelta(days=offset))
            result = engine.evaluate(board_of(("Backlog", [c])))
            assert len([a for a in result if a.type in due_types]) <= 1


class TestStatusRules:
    def test_in_progress_overdue(self, engine: RecommendationEngine):
        c = card(status=Status.IN_PROGRESS, due_date=NOW - timedelta(days=1))
        result = engine.evaluate(board_of(("In Progress", [c])))
        assert types_for(result, c.id) == [AdvisoryType.IN_PROGRESS_OVERDUE, AdvisoryType.OVERDUE]

    def test_in_progress_due_soon(self, engine: RecommendationEngine):
        c = card(status=Status.IN_PROGRESS, due_date=NOW + timedelta(days=1))
        result = engine.evaluate(board_of(("In Progress", [c])))
        assert types_for(result, c.id) == [AdvisoryType.IN_PROGRESS_DUE_SOON]
        assert result[0].reason == "In progress task due in 1 day(s)"

    def test_in_progress_due_in_two_days_is_quiet(self, engine: RecommendationEngine):
        c = card(status=Status.IN_PROGRESS, due_date=NOW + timedelta(days=2))
        assert engine.evaluate(board_of(("In Progress", [c]))) == []

    def test_blocked(self, engine: RecommendationEngine):
        c = card(status=Status.BLOCKED)
        result = engine.evaluate(board_of(("Review", [c])))
        assert types_for(result, c.id) == [AdvisoryType.BLOCKED_TASK]
        assert result[0].severity == Severity.MEDIUM

    def test_critical_in_todo(self, engine: RecommendationEngine):
        c = card(priority=Priority.CRITICAL, status=Status.TODO, due_date=NOW + timedelta(days=30))
        result = engine.evaluate(board_of(("Review", [c])))
        assert types_for(result, c.id) == [AdvisoryType.CRITICAL_IN_TODO]
        assert result[0].severity == Severity.HIGH


class TestAlertRules:
    def test_done_card_outside_done_list(self, engine: RecommendationEngine):
        c = card(status=Status.DONE)
        result = engine.evaluate(board_of(("Review", [c]), ("Done", [])))
        assert types_for(result, c.id) == [AdvisoryType.MOVE_TO_DONE]
        assert result[0].severity == Severity.LOW

    def test_complete_list_counts_as_done_list(self, engine: RecommendationEngine):
        c = card(status=Status.DONE)
        result = engine.evaluate(board_of(("Review", [c]), ("Completed", [])))
        assert types_for(result, c.id) == [AdvisoryType.MOVE_TO_DONE]

    def test_done_card_in_done_list(self, engine: RecommendationEngine):
        c = card(status=Status.DONE)
        assert engine.evaluate(board_of(("Review", []), ("Done", [c]))) == []

    def test_no_done_list_on_board(self, engine: RecommendationEngine):
        c = card(status=Status.DONE)
        assert engine.evaluate(board_of(("Review", [c]))) == []


class TestRanking:
    def test_critical_card_full_output(self, engine: RecommendationEngine):
        """Priority, due date and status advisories combine and rank."""
        c = card(priority=Priority.CRITICAL, status=Status.TODO)
        result = engine.evaluate(board_of(("Backlog", [c]), ("In Progress", [])))

        assert [a.type for a in result] == [
            AdvisoryType.CRITICAL_PRIORITY,
            AdvisoryType.CRITICAL_IN_TODO,
            AdvisoryType.NO_DUE_DATE_HIGH_PRIORITY,
        ]

    def test_ties_keep_group_then_card_order(self, engine: RecommendationEngine):
        done = card("done", status=Status.DONE)
        backlog = card("backlog", status=Status.BACKLOG, due_date=NOW + timedelta(days=5))
        blocked = card("blocked", status=Status.BLOCKED)
        result = engine.evaluate(board_of(("Review", [backlog, done, blocked]), ("Done", [])))

        assert [(a.card_id, a.type) for a in result] == [
            (blocked.id, AdvisoryType.BLOCKED_TASK),
            (done.id, AdvisoryType.MOVE_TO_DONE),
            (backlog.id, AdvisoryType.UPCOMING_DEADLINE),
        ]

    def test_severity_never_increases(self, engine: RecommendationEngine):
        cards = [
            card("a", priority=Priority.CRITICAL, status=Status.BACKLOG, due_date=NOW - timedelta(days=1)),
            card("b", priority=Priority.HIGH, status=Status.BLOCKED),
            card("c", status=Status.DONE),
            card("d", status=Status.IN_PROGRESS, due_date=NOW),
        ]
        result = engine.evaluate(board_of(("Backlog", cards), ("In Progress", []), ("Done", [])))
        weights = [a.severity.weight for a in result]
        assert weights == sorted(weights, reverse=True)
        assert len(result) >= 6

    def test_same_card_in_several_groups(self, engine: RecommendationEngine):
        """No deduplication across groups."""
        c = card(priority=Priority.CRITICAL, status=Status.TODO)
        result = engine.evaluate(board_of(("Backlog", [c]), ("In Progress", [])))
        assert {a.card_id for a in result} == {c.id}
        assert len(result) == 3

"""Data models."""

from .advisory import Advisory
from .aggregate import BoardAggregate, ListAggregate
from .board import Board, BoardList, ordering_key
from .card import Card, CardPatch, parse_due_date
from .enums import AdvisoryType, Priority, Severity, Status
from .result import OperationResult
from .user import User

__all__ = [
    "Advisory",
    "AdvisoryType",
    "Board",
    "BoardAggregate",
    "BoardList",
    "Card",
    "CardPatch",
    "ListAggregate",
    "OperationResult",
    "Priority",
    "Severity",
    "Status",
    "User",
    "ordering_key",
    "parse_due_date",
]

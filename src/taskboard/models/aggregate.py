"""Fully materialized board aggregates handed to the core by repositories."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field

from .board import Board, BoardList
from .card import Card
from .user import User


class ListAggregate(BaseModel):
    """A list together with its cards, sorted by position."""

    record: BoardList
    cards: list[Card] = Field(default_factory=list)

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def name(self) -> str:
        return self.record.name

    def contains(self, card_id: str) -> bool:
        """Whether this list's card sequence references the card."""
        return card_id in self.record.card_ids

    def name_contains(self, *needles: str) -> bool:
        """Case-insensitive substring match against the list name."""
        lowered = self.name.lower()
        return any(needle in lowered for needle in needles)


class BoardAggregate(BaseModel):
    """A board with its owner, members, lists and cards loaded as one unit."""

    board: Board
    owner: User | None = None
    members: list[User] = Field(default_factory=list)
    lists: list[ListAggregate] = Field(default_factory=list)

    @property
    def id(self) -> str:
        return self.board.id

    def iter_cards(self) -> Iterator[Card]:
        """All cards in list order, then card order within each list."""
        for lst in self.lists:
            yield from lst.cards

    def list_containing(self, card_id: str) -> ListAggregate | None:
        """First list whose card sequence contains the card (linear scan)."""
        for lst in self.lists:
            if lst.contains(card_id):
                return lst
        return None

    def lists_matching(self, *needles: str) -> list[ListAggregate]:
        """Lists whose names contain any of the given lowercase needles."""
        return [lst for lst in self.lists if lst.name_contains(*needles)]

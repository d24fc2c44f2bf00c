"""Repository protocol for board storage backends."""

from contextlib import AbstractContextManager
from typing import Protocol

from ..models import Board, BoardAggregate, BoardList, Card, User


class RepositoryProtocol(Protocol):
    """Interface for board storage backends.

    Records cross-reference each other by id. Getters return copies, so
    mutating a returned model has no effect until it is saved.

    Writes made inside ``transaction()`` become visible together or not at
    all, and transactions are single-writer: sibling counts read inside one
    cannot change before it commits.
    """

    def transaction(self) -> AbstractContextManager[None]:
        """Group writes into one atomic unit.

        Nested blocks join the outermost transaction. An exception raised
        inside the outermost block rolls every write back and propagates.
        """
        ...

    def locked(self) -> AbstractContextManager[None]:
        """Hold the writer lock across several calls.

        Used to read back a committed transaction before another writer can
        change it. Transactions opened inside still commit normally.
        """
        ...

    def get_user(self, user_id: str) -> User | None:
        """Get a user by ID, None if not found."""
        ...

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email (case-insensitive), None if not found."""
        ...

    def save_user(self, user: User) -> User:
        """Create or update a user."""
        ...

    def get_board(self, board_id: str) -> Board | None:
        """Get a board record by ID, None if not found."""
        ...

    def boards_for_user(self, user_id: str) -> list[Board]:
        """Boards the user owns or is a member of, in no particular order."""
        ...

    def save_board(self, board: Board) -> Board:
        """Create or update a board."""
        ...

    def get_list(self, list_id: str) -> BoardList | None:
        """Get a list by ID, None if not found."""
        ...

    def count_lists(self, board_id: str) -> int:
        """Number of lists belonging to the board."""
        ...

    def save_list(self, board_list: BoardList) -> BoardList:
        """Create or update a list."""
        ...

    def get_card(self, card_id: str) -> Card | None:
        """Get a card by ID, None if not found."""
        ...

    def count_cards(self, list_id: str) -> int:
        """Number of cards belonging to the list."""
        ...

    def save_card(self, card: Card) -> Card:
        """Create or update a card."""
        ...

    def load_aggregate(self, board_id: str) -> BoardAggregate | None:
        """Load a board with its owner, members, lists and cards.

        Lists and cards are sorted by position with creation order as the
        tie-break. Returns None if the board does not exist.
        """
        ...

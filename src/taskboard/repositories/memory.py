"""In-memory repository."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from ..models import (
    Board,
    BoardAggregate,
    BoardList,
    Card,
    ListAggregate,
    User,
    ordering_key,
)

logger = logging.getLogger(__name__)


class InMemoryRepository:
    """
    Repository keeping all records in process memory.

    Stored records are never mutated in place (saves and gets copy), so a
    transaction snapshot only needs shallow copies of the record maps.
    Reads take the same lock as writers, so a reader never sees a
    transaction that is still open.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._boards: dict[str, Board] = {}
        self._lists: dict[str, BoardList] = {}
        self._cards: dict[str, Card] = {}
        self._lock = threading.RLock()
        self._depth = 0

    # --- Transactions ---

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the writer lock without opening a transaction."""
        with self._lock:
            yield

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Single-writer transaction with snapshot rollback."""
        with self._lock:
            # Nested blocks join the outermost transaction
            if self._depth > 0:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return

            # Outermost block: snapshot so any failure can restore state
            snapshot = self._snapshot()
            self._depth = 1
            try:
                yield
                self._commit()
            except BaseException:
                logger.debug("Transaction rolled back")
                self._restore(snapshot)
                raise
            finally:
                self._depth = 0

    def _snapshot(self) -> tuple[dict, dict, dict, dict]:
        return (
            dict(self._users),
            dict(self._boards),
            dict(self._lists),
            dict(self._cards),
        )

    def _restore(self, snapshot: tuple[dict, dict, dict, dict]) -> None:
        self._users, self._boards, self._lists, self._cards = snapshot

    def _commit(self) -> None:
        """Persist committed state. Nothing to do in memory."""

    def _autocommit(self) -> None:
        """Commit a write made outside any transaction."""
        if self._depth == 0:
            self._commit()

    # --- Users ---

    def get_user(self, user_id: str) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy(deep=True) if user else None

    def get_user_by_email(self, email: str) -> User | None:
        wanted = email.strip().lower()
        with self._lock:
            for user in self._users.values():
                if user.email == wanted:
                    return user.model_copy(deep=True)
        return None

    def save_user(self, user: User) -> User:
        with self._lock:
            self._users[user.id] = user.model_copy(deep=True)
            self._autocommit()
        return user

    # --- Boards ---

    def get_board(self, board_id: str) -> Board | None:
        with self._lock:
            board = self._boards.get(board_id)
            return board.model_copy(deep=True) if board else None

    def boards_for_user(self, user_id: str) -> list[Board]:
        with self._lock:
            return [
                board.model_copy(deep=True)
                for board in self._boards.values()
                if user_id in board.access_ids
            ]

    def save_board(self, board: Board) -> Board:
        with self._lock:
            self._boards[board.id] = board.model_copy(deep=True)
            self._autocommit()
        return board

    # --- Lists ---

    def get_list(self, list_id: str) -> BoardList | None:
        with self._lock:
            board_list = self._lists.get(list_id)
            return board_list.model_copy(deep=True) if board_list else None

    def count_lists(self, board_id: str) -> int:
        with self._lock:
            return sum(1 for lst in self._lists.values() if lst.board_id == board_id)

    def save_list(self, board_list: BoardList) -> BoardList:
        with self._lock:
            self._lists[board_list.id] = board_list.model_copy(deep=True)
            self._autocommit()
        return board_list

    # --- Cards ---

    def get_card(self, card_id: str) -> Card | None:
        with self._lock:
            card = self._cards.get(card_id)
            return card.model_copy(deep=True) if card else None

    def count_cards(self, list_id: str) -> int:
        with self._lock:
            return sum(1 for card in self._cards.values() if card.list_id == list_id)

    def save_card(self, card: Card) -> Card:
        with self._lock:
            self._cards[card.id] = card.model_copy(deep=True)
            self._autocommit()
        return card

    # --- Aggregates ---

    def load_aggregate(self, board_id: str) -> BoardAggregate | None:
        with self._lock:
            board = self.get_board(board_id)
            if board is None:
                return None

            # Members whose user record is gone are left out
            members = [
                user for user in (self.get_user(uid) for uid in board.member_ids) if user
            ]

            lists: list[ListAggregate] = []
            for list_id in board.list_ids:
                board_list = self.get_list(list_id)
                if board_list is None:
                    logger.debug("load_aggregate: dangling list ref %s on %s", list_id, board_id)
                    continue
                cards = [card for card in (self.get_card(cid) for cid in board_list.card_ids) if card]
                cards.sort(key=ordering_key)
                lists.append(ListAggregate(record=board_list, cards=cards))

            # Display order: position, then creation time, then id
            lists.sort(key=lambda agg: ordering_key(agg.record))

            return BoardAggregate(
                board=board,
                owner=self.get_user(board.owner_id),
                members=members,
                lists=lists,
            )

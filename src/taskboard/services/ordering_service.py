"""Service for sibling ordering: appending lists/cards and moving cards."""

from __future__ import annotations

import logging
from datetime import datetime

from ..errors import NotFoundError, PartiallyAppliedError, ValidationError
from ..models import Board, BoardList, Card
from ..repositories import RepositoryProtocol
from ..utils import now_utc
from .validation import build

logger = logging.getLogger(__name__)

# Position a moved card takes when the caller gives none (front of the list)
DEFAULT_MOVE_POSITION = 0


class OrderingService:
    """Maintains position invariants when lists and cards are added or moved.

    Every operation runs inside one repository transaction. Sibling counts
    are read inside that transaction, which the repository serializes, so
    concurrent appends to the same parent cannot share a position.
    """

    def __init__(self, repository: RepositoryProtocol) -> None:
        self.repository = repository

    def append_list(self, board: Board, name: str) -> BoardList:
        """Create a list at the end of the board (position = sibling count)."""
        with self.repository.transaction():
            current = self._require_board(board.id)
            position = self.repository.count_lists(current.id)
            board_list = build(BoardList, name=name, board_id=current.id, position=position)

            self.repository.save_list(board_list)
            current.list_ids.append(board_list.id)
            current.updated = now_utc()
            self.repository.save_board(current)

        logger.info("List created: %s on board %s (position=%d)", board_list.id, board.id, position)
        return board_list

    def append_card(
        self,
        board_list: BoardList,
        *,
        title: str,
        created_by: str,
        description: str = "",
        due_date: datetime | None = None,
    ) -> Card:
        """Create a card at the end of the list (position = sibling count)."""
        with self.repository.transaction():
            current = self._require_list(board_list.id)
            position = self.repository.count_cards(current.id)
            card = build(
                Card,
                title=title,
                description=description,
                list_id=current.id,
                position=position,
                due_date=due_date,
                created_by=created_by,
            )

            self.repository.save_card(card)
            current.card_ids.append(card.id)
            current.updated = now_utc()
            self.repository.save_list(current)

        logger.info("Card created: %s in list %s (position=%d)", card.id, board_list.id, position)
        return card

    def move_card(self, card: Card, destination: BoardList, position: int | None = None) -> Card:
        """
        Move a card to another list (or within its own list).

        Detaches the card from its current list, attaches it to the
        destination and updates the card's list and position, all in one
        transaction. Without an explicit position the card goes to the front.

        Raises:
            ValidationError: If position is negative.
            PartiallyAppliedError: If the stored state does not reflect the
                move after commit.
        """
        if position is None:
            position = DEFAULT_MOVE_POSITION
        if position < 0:
            raise ValidationError("position must be zero or greater")

        # Keep the lock until the committed move has been read back
        with self.repository.locked():
            with self.repository.transaction():
                moving = self.repository.get_card(card.id)
                if moving is None:
                    raise NotFoundError("Card not found")
                source_id = moving.list_id
                source = self.repository.get_list(source_id)
                if source is not None and source.id == destination.id:
                    target = source
                else:
                    target = self._require_list(destination.id)

                now = now_utc()
                if source is None:
                    logger.warning(
                        "move_card: card %s referenced missing list %s", card.id, source_id
                    )
                else:
                    source.card_ids = [cid for cid in source.card_ids if cid != moving.id]
                    source.updated = now
                    if source is not target:
                        self.repository.save_list(source)

                target.card_ids.append(moving.id)
                target.updated = now
                self.repository.save_list(target)

                moving.list_id = target.id
                moving.position = position
                moving.updated = now
                self.repository.save_card(moving)

            self._verify_move(moving.id, source_id, target.id)
        logger.info(
            "Card moved: %s (%s -> %s, position=%d)", moving.id, source_id, target.id, position
        )
        return moving

    def _verify_move(self, card_id: str, source_id: str, destination_id: str) -> None:
        """Check the three parts of a move are all visible in storage."""
        problems: list[str] = []

        stored = self.repository.get_card(card_id)
        if stored is None or stored.list_id != destination_id:
            problems.append("card does not reference destination list")

        destination = self.repository.get_list(destination_id)
        if destination is None or card_id not in destination.card_ids:
            problems.append("destination list does not contain card")

        if source_id != destination_id:
            source = self.repository.get_list(source_id)
            if source is not None and card_id in source.card_ids:
                problems.append("source list still contains card")

        if problems:
            logger.error("Card move partially applied for %s: %s", card_id, "; ".join(problems))
            raise PartiallyAppliedError(
                "Card move partially applied: " + "; ".join(problems),
                entity_ids=[card_id, source_id, destination_id],
            )

    def _require_board(self, board_id: str) -> Board:
        board = self.repository.get_board(board_id)
        if board is None:
            raise NotFoundError("Board not found")
        return board

    def _require_list(self, list_id: str) -> BoardList:
        board_list = self.repository.get_list(list_id)
        if board_list is None:
            raise NotFoundError("List not found")
        return board_list

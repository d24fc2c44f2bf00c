"""Service for board operations."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import pydantic

from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import (
    Advisory,
    Board,
    BoardAggregate,
    BoardList,
    Card,
    CardPatch,
    User,
    parse_due_date,
)
from ..repositories import RepositoryProtocol
from .access_policy import require_access
from .membership_service import MembershipService
from .ordering_service import OrderingService
from .recommendation_service import RecommendationEngine
from .validation import build, format_errors

logger = logging.getLogger(__name__)


class BoardService:
    """
    Command-style board operations for an authenticated user.

    Every operation resolves the records it needs, checks access before any
    other work, then delegates ordering, membership or recommendation logic.
    Failures raise BoardError subclasses.
    """

    def __init__(
        self,
        repository: RepositoryProtocol,
        recommendation_engine: RecommendationEngine | None = None,
    ) -> None:
        self.repository = repository
        self.ordering = OrderingService(repository)
        self.membership = MembershipService(repository)
        self.recommendations = recommendation_engine or RecommendationEngine()

    # --- Users ---

    def register_user(self, name: str, email: str, password_hash: str = "") -> User:
        """Create a user. Emails are unique."""
        user = build(User, name=name, email=email, password_hash=password_hash)
        with self.repository.transaction():
            if self.repository.get_user_by_email(user.email) is not None:
                raise ConflictError("Email already registered")
            self.repository.save_user(user)
        logger.info("User registered: %s", user.id)
        return user

    def get_user(self, user_id: str) -> User:
        """Get a user by ID."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    # --- Boards ---

    def list_boards_for_user(self, user_id: str) -> list[Board]:
        """Boards the user owns or belongs to, most recently created first."""
        boards = self.repository.boards_for_user(user_id)
        return sorted(boards, key=lambda b: (b.created, b.id), reverse=True)

    def create_board(
        self,
        user_id: str,
        name: str,
        description: str | None = None,
        is_public: bool = False,
    ) -> Board:
        """Create a board owned by the user, with the user as sole member."""
        with self.repository.transaction():
            owner = self.get_user(user_id)
            board = build(
                Board,
                name=name,
                description=description,
                owner_id=owner.id,
                member_ids=[owner.id],
                is_public=is_public,
            )
            self.repository.save_board(board)
            owner.board_ids.append(board.id)
            self.repository.save_user(owner)

        logger.info("Board created: %s by %s", board.id, user_id)
        return board

    def get_board(self, user_id: str, board_id: str) -> BoardAggregate:
        """Load the fully populated board if the user can access it."""
        aggregate = self.repository.load_aggregate(board_id)
        if aggregate is None:
            raise NotFoundError("Board not found")
        require_access(aggregate.board, user_id)
        return aggregate

    def invite_member(self, user_id: str, board_id: str, invitee_email: str) -> Board:
        """Invite a user by email. Only the owner may invite."""
        return self.membership.invite(board_id, user_id, invitee_email)

    # --- Lists and cards ---

    def create_list(self, user_id: str, board_id: str, name: str) -> BoardList:
        """Append a new list to the board."""
        board = self._require_board(board_id)
        require_access(board, user_id)
        return self.ordering.append_list(board, name)

    def create_card(
        self,
        user_id: str,
        board_id: str,
        list_id: str,
        title: str,
        description: str | None = None,
        due_date: str | datetime | None = None,
    ) -> Card:
        """Append a new card to a list on the board, created by the user."""
        board = self.repository.get_board(board_id)
        board_list = self.repository.get_list(list_id)
        if board is None or board_list is None or board_list.board_id != board_id:
            raise NotFoundError("Board or list not found")
        require_access(board, user_id)

        try:
            parsed_due = parse_due_date(due_date)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        return self.ordering.append_card(
            board_list,
            title=title,
            created_by=user_id,
            description=description or "",
            due_date=parsed_due,
        )

    def move_card(
        self,
        user_id: str,
        card_id: str,
        new_list_id: str,
        position: int | None = None,
    ) -> Card:
        """
        Move a card to another list.

        Access is checked against the destination board first, then the
        board the card currently sits on.
        """
        card = self._require_card(card_id)
        destination = self.repository.get_list(new_list_id)
        if destination is None:
            raise NotFoundError("List or board not found")
        destination_board = self.repository.get_board(destination.board_id)
        if destination_board is None:
            raise NotFoundError("List or board not found")
        require_access(destination_board, user_id)

        source = self.repository.get_list(card.list_id)
        if source is not None and source.board_id != destination_board.id:
            source_board = self._require_board(source.board_id)
            require_access(source_board, user_id)

        return self.ordering.move_card(card, destination, position)

    def patch_card(self, user_id: str, card_id: str, fields: dict[str, Any]) -> Card:
        """
        Update whitelisted card fields in place.

        Accepts title, description, priority, status, dueDate and assignedTo
        (snake_case names work too). Unknown fields are rejected.
        """
        card = self._require_card(card_id)
        board = self._board_for_card(card)
        require_access(board, user_id)

        try:
            patch = CardPatch.model_validate(fields)
        except pydantic.ValidationError as e:
            raise ValidationError(format_errors(e)) from e

        if patch.assigned_to:
            unknown = [uid for uid in patch.assigned_to if self.repository.get_user(uid) is None]
            if unknown:
                raise ValidationError(f"assigned_to: unknown user(s): {', '.join(unknown)}")

        with self.repository.transaction():
            current = self._require_card(card_id)
            updated = patch.apply(current)
            self.repository.save_card(updated)

        logger.info("Card patched: %s (%s)", card_id, ", ".join(sorted(patch.model_fields_set)))
        return updated

    # --- Recommendations ---

    def get_recommendations(self, user_id: str, board_id: str) -> list[Advisory]:
        """Ranked advisories for the board."""
        aggregate = self.get_board(user_id, board_id)
        return self.recommendations.evaluate(aggregate)

    # --- Private Methods ---

    def _require_board(self, board_id: str) -> Board:
        board = self.repository.get_board(board_id)
        if board is None:
            raise NotFoundError("Board not found")
        return board

    def _require_card(self, card_id: str) -> Card:
        card = self.repository.get_card(card_id)
        if card is None:
            raise NotFoundError("Card not found")
        return card

    def _board_for_card(self, card: Card) -> Board:
        board_list = self.repository.get_list(card.list_id)
        if board_list is None:
            raise NotFoundError("List not found")
        return self._require_board(board_list.board_id)

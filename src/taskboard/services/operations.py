"""Operation facade returning discriminated results instead of raising."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from ..errors import BoardError
from ..models import (
    Advisory,
    Board,
    BoardAggregate,
    BoardList,
    Card,
    OperationResult,
    User,
)
from .board_service import BoardService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BoardOperations:
    """
    Boundary-facing wrapper around BoardService.

    Each method returns an OperationResult carrying either the payload or
    one BoardError. Anything that is not a BoardError still propagates.
    """

    def __init__(self, service: BoardService) -> None:
        self.service = service

    def _run(self, name: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> OperationResult[T]:
        try:
            return OperationResult.ok_result(fn(*args, **kwargs))
        except BoardError as e:
            logger.info("%s failed: %s (%s)", name, e.message, e.kind.value)
            return OperationResult.failure(e)

    def register_user(self, name: str, email: str, password_hash: str = "") -> OperationResult[User]:
        return self._run("register_user", self.service.register_user, name, email, password_hash)

    def list_boards_for_user(self, user_id: str) -> OperationResult[list[Board]]:
        return self._run("list_boards_for_user", self.service.list_boards_for_user, user_id)

    def create_board(
        self,
        user_id: str,
        name: str,
        description: str | None = None,
        is_public: bool = False,
    ) -> OperationResult[Board]:
        return self._run(
            "create_board", self.service.create_board, user_id, name, description, is_public
        )

    def get_board(self, user_id: str, board_id: str) -> OperationResult[BoardAggregate]:
        return self._run("get_board", self.service.get_board, user_id, board_id)

    def invite_member(self, user_id: str, board_id: str, invitee_email: str) -> OperationResult[Board]:
        return self._run(
            "invite_member", self.service.invite_member, user_id, board_id, invitee_email
        )

    def create_list(self, user_id: str, board_id: str, name: str) -> OperationResult[BoardList]:
        return self._run("create_list", self.service.create_list, user_id, board_id, name)

    def create_card(
        self,
        user_id: str,
        board_id: str,
        list_id: str,
        title: str,
        description: str | None = None,
        due_date: str | datetime | None = None,
    ) -> OperationResult[Card]:
        return self._run(
            "create_card",
            self.service.create_card,
            user_id,
            board_id,
            list_id,
            title,
            description,
            due_date,
        )

    def move_card(
        self, user_id: str, card_id: str, new_list_id: str, position: int | None = None
    ) -> OperationResult[Card]:
        return self._run(
            "move_card", self.service.move_card, user_id, card_id, new_list_id, position
        )

    def patch_card(self, user_id: str, card_id: str, fields: dict[str, Any]) -> OperationResult[Card]:
        return self._run("patch_card", self.service.patch_card, user_id, card_id, fields)

    def get_recommendations(self, user_id: str, board_id: str) -> OperationResult[list[Advisory]]:
        return self._run(
            "get_recommendations", self.service.get_recommendations, user_id, board_id
        )

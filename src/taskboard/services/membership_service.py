"""Service for board membership."""

from __future__ import annotations

import logging

from ..errors import ConflictError, NotFoundError, PartiallyAppliedError
from ..models import Board
from ..repositories import RepositoryProtocol
from ..utils import now_utc
from .access_policy import require_owner

logger = logging.getLogger(__name__)


class MembershipService:
    """Invites users to boards, keeping both sides of membership in step."""

    def __init__(self, repository: RepositoryProtocol) -> None:
        self.repository = repository

    def invite(self, board_id: str, inviter_id: str, invitee_email: str) -> Board:
        """
        Add the user with the given email to the board's members.

        The board's member list and the invitee's board list are updated in
        one transaction.

        Raises:
            NotFoundError: Board or invitee does not exist.
            AccessDeniedError: Inviter is not the board owner.
            ConflictError: Invitee is already a member.
        """
        with self.repository.locked():
            with self.repository.transaction():
                board = self.repository.get_board(board_id)
                if board is None:
                    raise NotFoundError("Board not found")

                require_owner(board, inviter_id)

                invitee = self.repository.get_user_by_email(invitee_email)
                if invitee is None:
                    logger.debug("invite: no user with email %s", invitee_email)
                    raise NotFoundError("User not found")

                if invitee.id in board.member_ids:
                    raise ConflictError("User already in board")

                now = now_utc()
                board.member_ids.append(invitee.id)
                board.updated = now
                if board.id not in invitee.board_ids:
                    invitee.board_ids.append(board.id)
                invitee.updated = now

                self.repository.save_board(board)
                self.repository.save_user(invitee)

            self._verify_membership(board.id, invitee.id)
        logger.info("User %s invited to board %s by %s", invitee.id, board.id, inviter_id)
        return board

    def _verify_membership(self, board_id: str, user_id: str) -> None:
        """Check both sides of the membership were stored."""
        board = self.repository.get_board(board_id)
        user = self.repository.get_user(user_id)
        on_board = board is not None and user_id in board.member_ids
        on_user = user is not None and board_id in user.board_ids
        if on_board and on_user:
            return

        logger.error(
            "Invite partially applied: board=%s user=%s (on_board=%s, on_user=%s)",
            board_id,
            user_id,
            on_board,
            on_user,
        )
        raise PartiallyAppliedError(
            "Invite partially applied", entity_ids=[board_id, user_id]
        )

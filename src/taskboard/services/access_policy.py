"""Access-control predicates for boards."""

import logging

from ..errors import AccessDeniedError
from ..models import Board

logger = logging.getLogger(__name__)


def can_access(board: Board, user_id: str) -> bool:
    """True if the user owns the board or is one of its members."""
    return board.owner_id == user_id or user_id in board.member_ids


def can_invite(board: Board, user_id: str) -> bool:
    """True if the user may invite others. Only the owner can."""
    return board.owner_id == user_id


def require_access(board: Board, user_id: str) -> None:
    """Raise AccessDeniedError unless the user can read and write the board."""
    if not can_access(board, user_id):
        logger.debug("Access denied: user %s on board %s", user_id, board.id)
        raise AccessDeniedError("Access denied")


def require_owner(board: Board, user_id: str) -> None:
    """Raise AccessDeniedError unless the user owns the board."""
    if not can_invite(board, user_id):
        logger.debug("Owner check failed: user %s on board %s", user_id, board.id)
        raise AccessDeniedError("Only board owner can invite users")

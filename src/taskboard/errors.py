"""Error taxonomy for board operations."""

from enum import Enum


class ErrorKind(str, Enum):
    """Stable error classes the boundary layer maps to external statuses."""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    BAD_REQUEST = "bad_request"
    CONFLICT = "conflict"
    PARTIALLY_APPLIED = "partially_applied"


class BoardError(Exception):
    """Base exception for board operation errors."""

    kind: ErrorKind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(BoardError):
    """Referenced board, list, card or user does not exist."""

    kind = ErrorKind.NOT_FOUND


class AccessDeniedError(BoardError):
    """User is not allowed to perform the operation on the board."""

    kind = ErrorKind.FORBIDDEN


class ConflictError(BoardError):
    """Operation conflicts with existing state (e.g. already a member)."""

    kind = ErrorKind.CONFLICT


class ValidationError(BoardError):
    """Missing required field, malformed date or unknown enum value."""

    kind = ErrorKind.BAD_REQUEST


class PartiallyAppliedError(BoardError):
    """A multi-write operation left state that needs reconciliation."""

    kind = ErrorKind.PARTIALLY_APPLIED

    def __init__(self, message: str, entity_ids: list[str] | None = None) -> None:
        super().__init__(message)
        self.entity_ids = entity_ids or []

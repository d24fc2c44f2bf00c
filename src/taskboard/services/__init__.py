"""Service layer for business logic."""

from .access_policy import can_access, can_invite, require_access, require_owner
from .board_service import BoardService
from .membership_service import MembershipService
from .operations import BoardOperations
from .ordering_service import OrderingService
from .recommendation_service import RecommendationEngine

__all__ = [
    "BoardOperations",
    "BoardService",
    "MembershipService",
    "OrderingService",
    "RecommendationEngine",
    "can_access",
    "can_invite",
    "require_access",
    "require_owner",
]

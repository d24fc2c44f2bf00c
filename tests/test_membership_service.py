"""Tests for inviting members to boards."""

import pytest

from taskboard.errors import (
    AccessDeniedError,
    ConflictError,
    NotFoundError,
    PartiallyAppliedError,
)
from taskboard.models import Board, User
from taskboard.repositories import InMemoryRepository
from taskboard.services import MembershipService


@pytest.fixture
def repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def owner(repo: InMemoryRepository) -> User:
    return repo.save_user(User(name="Owner", email="owner@example.com"))


@pytest.fixture
def invitee(repo: InMemoryRepository) -> User:
    return repo.save_user(User(name="Guest", email="guest@example.com"))


@pytest.fixture
def board(repo: InMemoryRepository, owner: User) -> Board:
    return repo.save_board(Board(name="Board", owner_id=owner.id, member_ids=[owner.id]))


@pytest.fixture
def membership(repo: InMemoryRepository) -> MembershipService:
    return MembershipService(repo)


class TestInvite:
    def test_updates_both_sides(
        self,
        membership: MembershipService,
        repo: InMemoryRepository,
        board: Board,
        owner: User,
        invitee: User,
    ):
        updated = membership.invite(board.id, owner.id, invitee.email)

        assert invitee.id in updated.member_ids
        assert invitee.id in repo.get_board(board.id).member_ids
        assert board.id in repo.get_user(invitee.id).board_ids

    def test_email_match_is_case_insensitive(
        self, membership: MembershipService, board: Board, owner: User, invitee: User
    ):
        updated = membership.invite(board.id, owner.id, "GUEST@example.com")
        assert invitee.id in updated.member_ids

    def test_already_member_conflicts_and_changes_nothing(
        self,
        membership: MembershipService,
        repo: InMemoryRepository,
        board: Board,
        owner: User,
        invitee: User,
    ):
        membership.invite(board.id, owner.id, invitee.email)
        before_board = repo.get_board(board.id)
        before_user = repo.get_user(invitee.id)

        with pytest.raises(ConflictError):
            membership.invite(board.id, owner.id, invitee.email)

        assert repo.get_board(board.id) == before_board
        assert repo.get_user(invitee.id) == before_user

    def test_member_cannot_invite(
        self,
        membership: MembershipService,
        repo: InMemoryRepository,
        board: Board,
        owner: User,
        invitee: User,
    ):
        membership.invite(board.id, owner.id, invitee.email)
        third = repo.save_user(User(name="Third", email="third@example.com"))

        with pytest.raises(AccessDeniedError):
            membership.invite(board.id, invitee.id, third.email)
        assert third.id not in repo.get_board(board.id).member_ids

    def test_owner_check_precedes_user_lookup(
        self, membership: MembershipService, board: Board
    ):
        """A non-owner learns nothing about which emails exist."""
        with pytest.raises(AccessDeniedError):
            membership.invite(board.id, "stranger", "nobody@example.com")

    def test_unknown_email(self, membership: MembershipService, board: Board, owner: User):
        with pytest.raises(NotFoundError, match="User"):
            membership.invite(board.id, owner.id, "nobody@example.com")

    def test_unknown_board(self, membership: MembershipService, owner: User, invitee: User):
        with pytest.raises(NotFoundError, match="Board"):
            membership.invite("missing", owner.id, invitee.email)

    def test_one_sided_write_detected(
        self, repo: InMemoryRepository, board: Board, owner: User, invitee: User
    ):
        class LossyRepository(InMemoryRepository):
            def save_user(self, user: User) -> User:
                return user

        lossy = LossyRepository()
        lossy._users, lossy._boards = dict(repo._users), dict(repo._boards)

        with pytest.raises(PartiallyAppliedError):
            MembershipService(lossy).invite(board.id, owner.id, invitee.email)

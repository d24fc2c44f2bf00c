"""Handlers for taskboard subcommands."""

from __future__ import annotations

import argparse
from collections.abc import Callable

from ..errors import ErrorKind
from ..models import Card, OperationResult
from ..services import BoardOperations
from ..utils import to_iso
from . import output

EXIT_CODES = {
    ErrorKind.BAD_REQUEST: 2,
    ErrorKind.FORBIDDEN: 3,
    ErrorKind.NOT_FOUND: 4,
    ErrorKind.CONFLICT: 5,
    ErrorKind.PARTIALLY_APPLIED: 6,
}

Handler = Callable[[BoardOperations, argparse.Namespace], int]


def _fail(result: OperationResult) -> int:
    output.error(result.message or "operation failed")
    return EXIT_CODES.get(result.kind, 1) if result.kind else 1


def _require_user(args: argparse.Namespace) -> str | None:
    if not args.user:
        output.error("No acting user: pass --user or set TASKBOARD_USER")
        return None
    return args.user


def _card_line(card: Card) -> str:
    due = f" due {to_iso(card.due_date)}" if card.due_date else ""
    return f"{card.title} [{card.status.value}, {card.priority.value}]{due} ({card.id})"


def parse_assignments(pairs: list[str]) -> dict[str, object]:
    """Turn FIELD=VALUE arguments into a patch dict.

    Empty values become null; assignedTo takes a comma-separated list.
    """
    fields: dict[str, object] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"expected FIELD=VALUE, got {pair!r}")
        if key in ("assignedTo", "assigned_to"):
            fields[key] = [v for v in value.split(",") if v]
        else:
            fields[key] = value or None
    return fields


def cmd_add_user(ops: BoardOperations, args: argparse.Namespace) -> int:
    result = ops.register_user(args.name, args.email)
    if not result.ok:
        return _fail(result)
    output.success(f"User created: {result.value.id}")
    return 0


def cmd_boards(ops: BoardOperations, args: argparse.Namespace) -> int:
    user_id = _require_user(args)
    if user_id is None:
        return 1
    result = ops.list_boards_for_user(user_id)
    if not result.ok:
        return _fail(result)
    if not result.value:
        output.info("No boards")
    for board in result.value:
        role = "owner" if board.owner_id == user_id else "member"
        output.info(f"{board.name} ({board.id}) - {role}")
    return 0


def cmd_create_board(ops: BoardOperations, args: argparse.Namespace) -> int:
    user_id = _require_user(args)
    if user_id is None:
        return 1
    result = ops.create_board(user_id, args.name, args.description, args.public)
    if not result.ok:
        return _fail(result)
    output.success(f"Board created: {result.value.id}")
    return 0


def cmd_show(ops: BoardOperations, args: argparse.Namespace) -> int:
    user_id = _require_user(args)
    if user_id is None:
        return 1
    result = ops.get_board(user_id, args.board)
    if not result.ok:
        return _fail(result)
    aggregate = result.value
    output.header(aggregate.board.name)
    if aggregate.board.description:
        print(aggregate.board.description)
    for lst in aggregate.lists:
        output.header(f"\n{lst.name} ({lst.id})")
        if not lst.cards:
            print("  (empty)")
        for card in lst.cards:
            print(f"  {_card_line(card)}")
    return 0


def cmd_invite(ops: BoardOperations, args: argparse.Namespace) -> int:
    user_id = _require_user(args)
    if user_id is None:
        return 1
    result = ops.invite_member(user_id, args.board, args.email)
    if not result.ok:
        return _fail(result)
    output.success("User invited successfully")
    return 0


def cmd_add_list(ops: BoardOperations, args: argparse.Namespace) -> int:
    user_id = _require_user(args)
    if user_id is None:
        return 1
    result = ops.create_list(user_id, args.board, args.name)
    if not result.ok:
        return _fail(result)
    output.success(f"List created: {result.value.id} (position {result.value.position})")
    return 0


def cmd_add_card(ops: BoardOperations, args: argparse.Namespace) -> int:
    user_id = _require_user(args)
    if user_id is None:
        return 1
    result = ops.create_card(
        user_id, args.board, args.list, args.title, args.description, args.due
    )
    if not result.ok:
        return _fail(result)
    output.success(f"Card created: {result.value.id} (position {result.value.position})")
    return 0


def cmd_move(ops: BoardOperations, args: argparse.Namespace) -> int:
    user_id = _require_user(args)
    if user_id is None:
        return 1
    result = ops.move_card(user_id, args.card, args.list, args.position)
    if not result.ok:
        return _fail(result)
    output.success(f"Card moved to {result.value.list_id} (position {result.value.position})")
    return 0


def cmd_patch(ops: BoardOperations, args: argparse.Namespace) -> int:
    user_id = _require_user(args)
    if user_id is None:
        return 1
    try:
        fields = parse_assignments(args.fields)
    except ValueError as e:
        output.error(str(e))
        return EXIT_CODES[ErrorKind.BAD_REQUEST]
    result = ops.patch_card(user_id, args.card, fields)
    if not result.ok:
        return _fail(result)
    output.success(f"Card updated: {_card_line(result.value)}")
    return 0


def cmd_recommend(ops: BoardOperations, args: argparse.Namespace) -> int:
    user_id = _require_user(args)
    if user_id is None:
        return 1
    result = ops.get_recommendations(user_id, args.board)
    if not result.ok:
        return _fail(result)
    if not result.value:
        output.success("Nothing to recommend")
    for advisory in result.value:
        print(f"{output.severity(advisory.severity.value)} {advisory.card_title}: {advisory.reason}")
        print(f"    -> {advisory.action}")
    return 0


COMMANDS: dict[str, Handler] = {
    "add-user": cmd_add_user,
    "boards": cmd_boards,
    "create-board": cmd_create_board,
    "show": cmd_show,
    "invite": cmd_invite,
    "add-list": cmd_add_list,
    "add-card": cmd_add_card,
    "move": cmd_move,
    "patch": cmd_patch,
    "recommend": cmd_recommend,
}

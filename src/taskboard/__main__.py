"""CLI entry point for taskboard."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Shared task boards with prioritized recommendations",
    )
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="Path to the YAML data file (default: taskboard.yaml)",
    )
    parser.add_argument(
        "--user",
        default=None,
        help="ID of the user to act as (default: $TASKBOARD_USER)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add-user", help="Register a user")
    p.add_argument("name")
    p.add_argument("email")

    sub.add_parser("boards", help="List boards you own or belong to")

    p = sub.add_parser("create-board", help="Create a board")
    p.add_argument("name")
    p.add_argument("--description", default=None)
    p.add_argument("--public", action="store_true", help="Mark the board public")

    p = sub.add_parser("show", help="Show a board with its lists and cards")
    p.add_argument("board")

    p = sub.add_parser("invite", help="Invite a user to a board by email")
    p.add_argument("board")
    p.add_argument("email")

    p = sub.add_parser("add-list", help="Append a list to a board")
    p.add_argument("board")
    p.add_argument("name")

    p = sub.add_parser("add-card", help="Append a card to a list")
    p.add_argument("board")
    p.add_argument("list")
    p.add_argument("title")
    p.add_argument("--description", default=None)
    p.add_argument("--due", default=None, help="Due date (ISO 8601)")

    p = sub.add_parser("move", help="Move a card to a list")
    p.add_argument("card")
    p.add_argument("list")
    p.add_argument("--position", type=int, default=None)

    p = sub.add_parser("patch", help="Update card fields")
    p.add_argument("card")
    p.add_argument("fields", nargs="+", metavar="FIELD=VALUE")

    p = sub.add_parser("recommend", help="Show recommendations for a board")
    p.add_argument("board")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # CLI flags override environment
    settings_kwargs: dict = {}
    if args.data_file:
        settings_kwargs["data_file"] = args.data_file
    if args.user:
        settings_kwargs["user"] = args.user
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)
    setup_logging(settings.verbose, settings.log_file)
    args.user = settings.user

    # Import here so --help and --version stay fast
    from .cli.commands import COMMANDS
    from .repositories import YamlRepository
    from .services import BoardOperations, BoardService

    repository = YamlRepository(settings.data_file)
    operations = BoardOperations(BoardService(repository))
    return COMMANDS[args.command](operations, args)


if __name__ == "__main__":
    raise SystemExit(main())

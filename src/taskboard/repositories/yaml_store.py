"""YAML document repository."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import yaml

from ..models import Board, BoardList, Card, User
from .memory import InMemoryRepository

logger = logging.getLogger(__name__)


class YamlRepository(InMemoryRepository):
    """
    Repository persisting all records to a single YAML file.

    The file is read once on construction and rewritten on every commit.
    Writes go to a temp file that replaces the original, so a failed write
    never leaves a half-written document behind.
    """

    FORMAT_VERSION = 1

    def __init__(self, path: Path) -> None:
        """
        Initialize repository.

        Args:
            path: Path to the YAML data file (created on first write)
        """
        super().__init__()
        self.path = path
        self._load()

    def _load(self) -> None:
        """Read the data file if it exists."""
        if not self.path.exists():
            logger.debug("Data file not found, starting empty: %s", self.path)
            return

        with self.path.open() as f:
            data = yaml.safe_load(f) or {}

        # Records are validated on load, so bad stored values surface here

        self._users = {u.id: u for u in (User.model_validate(d) for d in data.get("users", []))}
        self._boards = {b.id: b for b in (Board.model_validate(d) for d in data.get("boards", []))}
        self._lists = {
            lst.id: lst for lst in (BoardList.model_validate(d) for d in data.get("lists", []))
        }
        self._cards = {c.id: c for c in (Card.model_validate(d) for d in data.get("cards", []))}
        logger.info(
            "Loaded %s: %d users, %d boards, %d lists, %d cards",
            self.path,
            len(self._users),
            len(self._boards),
            len(self._lists),
            len(self._cards),
        )

    def _commit(self) -> None:
        """Write the whole document to disk."""
        data = {
            "version": self.FORMAT_VERSION,
            "users": [u.model_dump(mode="json") for u in self._users.values()],
            "boards": [b.model_dump(mode="json") for b in self._boards.values()],
            "lists": [lst.model_dump(mode="json") for lst in self._lists.values()],
            "cards": [c.model_dump(mode="json") for c in self._cards.values()],
        }

        # Write beside the target so os.replace stays on one filesystem
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w") as f:
                f.write("# Auto-generated - do not edit manually\n")
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote %s", self.path)

    def reload(self) -> None:
        """Discard in-memory state and re-read the data file."""
        with self._lock:
            self._users, self._boards, self._lists, self._cards = {}, {}, {}, {}
            self._load()

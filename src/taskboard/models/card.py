"""Card domain model and the whitelisted partial update applied to it."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils import ensure_utc, from_iso, new_id, now_utc
from .enums import Priority, Status

logger = logging.getLogger(__name__)


def parse_due_date(value: Any) -> datetime | None:
    """Strictly parse a due date supplied by a caller.

    Accepts None, an empty string, a date, a datetime, or an ISO string.

    Raises:
        ValueError: If the value cannot be interpreted as a calendar instant.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return ensure_utc(datetime(value.year, value.month, value.day))
    if isinstance(value, str):
        try:
            return from_iso(value)
        except ValueError:
            raise ValueError(f"invalid due date: {value!r}") from None
    raise ValueError(f"invalid due date: {value!r}")


def _coerce_enum(enum_cls: type[Priority] | type[Status], value: Any, field: str) -> Any:
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(enum_cls.choices())
        raise ValueError(f"{field} must be one of: {valid}") from None


class Card(BaseModel):
    """A card on a list.

    Stored due dates that cannot be parsed load as no due date, so a single
    bad record never breaks board evaluation.
    """

    id: str = Field(default_factory=new_id)
    title: str
    description: str = ""
    list_id: str
    position: int = Field(default=0, ge=0)
    due_date: datetime | None = None
    priority: Priority = Priority.LOW
    status: Status = Status.TODO
    created_by: str
    assigned_to: list[str] = Field(default_factory=list)
    created: datetime = Field(default_factory=now_utc)
    updated: datetime = Field(default_factory=now_utc)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Reject blank titles."""
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: str | None) -> str:
        return v or ""

    @field_validator("due_date", mode="before")
    @classmethod
    def lenient_due_date(cls, v: Any) -> datetime | None:
        try:
            return parse_due_date(v)
        except ValueError:
            logger.warning("Ignoring malformed due date: %r", v)
            return None

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, v: Any) -> Any:
        return _coerce_enum(Priority, v, "priority")

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v: Any) -> Any:
        return _coerce_enum(Status, v, "status")


class CardPatch(BaseModel):
    """Partial update of a card.

    Only the fields declared here may be patched; anything else is rejected.
    Fields not supplied are left untouched, and an explicit null due date
    clears it. Camel-case keys from the boundary layer are accepted.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str | None = None
    description: str | None = None
    priority: Priority | None = None
    status: Status | None = None
    due_date: datetime | None = Field(default=None, alias="dueDate")
    assigned_to: list[str] | None = Field(default=None, alias="assignedTo")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        # Explicit null is rejected here; unset titles never reach validation
        if v is None:
            raise ValueError("title cannot be empty")
        if not isinstance(v, str):
            raise ValueError("title must be a string")
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Any) -> str:
        return v or ""

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("priority cannot be null")
        return _coerce_enum(Priority, v, "priority")

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("status cannot be null")
        return _coerce_enum(Status, v, "status")

    @field_validator("due_date", mode="before")
    @classmethod
    def strict_due_date(cls, v: Any) -> datetime | None:
        return parse_due_date(v)

    @field_validator("assigned_to", mode="before")
    @classmethod
    def dedupe_assignees(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return list(dict.fromkeys(v))
        return v

    def changes(self) -> dict[str, Any]:
        """Field values explicitly supplied by the caller."""
        return {name: getattr(self, name) for name in self.model_fields_set}

    def apply(self, card: Card) -> Card:
        """Return a copy of card with the supplied fields replaced."""
        update = self.changes()
        update["updated"] = now_utc()
        return card.model_copy(update=update)

"""Board and list domain models."""

from datetime import datetime
from typing import Protocol

from pydantic import BaseModel, Field, field_validator

from ..utils import new_id, now_utc


class _Positioned(Protocol):
    id: str
    position: int
    created: datetime


def ordering_key(entity: _Positioned) -> tuple[int, datetime, str]:
    """Sort key for siblings: position, then creation order, then id."""
    return (entity.position, entity.created, entity.id)


def _require_text(value: str, field: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field} cannot be empty")
    return value


class Board(BaseModel):
    """A board owned by one user and shared with its members."""

    id: str = Field(default_factory=new_id)
    name: str
    description: str = ""
    owner_id: str
    member_ids: list[str] = Field(default_factory=list)
    list_ids: list[str] = Field(default_factory=list)
    is_public: bool = False
    created: datetime = Field(default_factory=now_utc)
    updated: datetime = Field(default_factory=now_utc)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject blank board names."""
        return _require_text(v, "name")

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: str | None) -> str:
        return v or ""

    @property
    def access_ids(self) -> set[str]:
        """Owner plus explicit members."""
        return {self.owner_id, *self.member_ids}


class BoardList(BaseModel):
    """An ordered list of cards on a board."""

    id: str = Field(default_factory=new_id)
    name: str
    board_id: str
    position: int = Field(default=0, ge=0)
    card_ids: list[str] = Field(default_factory=list)
    created: datetime = Field(default_factory=now_utc)
    updated: datetime = Field(default_factory=now_utc)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject blank list names."""
        return _require_text(v, "name")

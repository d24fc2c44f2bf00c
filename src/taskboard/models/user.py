"""User domain model."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from ..utils import new_id, now_utc


class User(BaseModel):
    """A registered user.

    The credential hash is opaque to the core; hashing and verification
    belong to the authentication layer.
    """

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password_hash: str = ""
    board_ids: list[str] = Field(default_factory=list)  # Boards created or joined
    created: datetime = Field(default_factory=now_utc)
    updated: datetime = Field(default_factory=now_utc)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip whitespace and reject blank names."""
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are unique case-insensitively, so store them lower-cased."""
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v

    def public_dict(self) -> dict:
        """Fields safe to hand to the boundary layer (no credential hash)."""
        return {"id": self.id, "name": self.name, "email": self.email}

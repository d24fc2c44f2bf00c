"""Identifier generation."""

import uuid


def new_id() -> str:
    """Generate a new stable entity identifier."""
    return uuid.uuid4().hex

"""Repository layer for data access."""

from .memory import InMemoryRepository
from .protocol import RepositoryProtocol
from .yaml_store import YamlRepository

__all__ = [
    "InMemoryRepository",
    "RepositoryProtocol",
    "YamlRepository",
]

"""
Persistence for surveys, tests and responses.

Components:
- store: BlobStore protocol with directory and in-memory implementations
- entities: EntityStore, JSON save/load of surveys, tests and responses
- workspace: the configured set of stores used by the CLI
"""

from .entities import ENTITY_ADAPTER, EntityStore
from .store import BlobStore, DirectoryBlobStore, MemoryBlobStore
from .workspace import Workspace

__all__ = [
    "BlobStore",
    "DirectoryBlobStore",
    "ENTITY_ADAPTER",
    "EntityStore",
    "MemoryBlobStore",
    "Workspace",
]

"""
Snapshot persistence for Tree Garden.
"""

from tree_garden.persistence.errors import (
    PersistenceError,
    PersistenceUnavailable,
    PersistenceCorrupt,
)
from tree_garden.persistence.gateway import PersistenceGateway, create_gateway
from tree_garden.persistence.store import (
    SnapshotStore,
    MemoryStore,
    JsonFileStore,
    SqlSnapshotStore,
)

__all__ = [
    "PersistenceError",
    "PersistenceUnavailable",
    "PersistenceCorrupt",
    "PersistenceGateway",
    "create_gateway",
    "SnapshotStore",
    "MemoryStore",
    "JsonFileStore",
    "SqlSnapshotStore",
]

"""
Persistence gateway: the only code that moves game state in and out of a store.

Every operation is one-shot and fail-soft. Errors are logged and reported
through return values; the game stays playable no matter what the store does.
"""

import logging
from pathlib import Path

from tree_garden.config import Settings
from tree_garden.database import init_db, make_engine, make_session_factory
from tree_garden.gameplay.garden import GameState
from tree_garden.persistence.errors import PersistenceError
from tree_garden.persistence.snapshot import (
    CURRENT_SCHEMA_VERSION,
    dump_snapshot,
    parse_snapshot,
    state_from_snapshot,
)
from tree_garden.persistence.store import (
    JsonFileStore,
    MemoryStore,
    SnapshotStore,
    SqlSnapshotStore,
)

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_KEY = "treeGameState"


class PersistenceGateway:
    """Saves and loads a GameState under a single well-known key."""

    def __init__(self, store: SnapshotStore, key: str = DEFAULT_SNAPSHOT_KEY) -> None:
        self.store = store
        self.key = key
        self.last_error: PersistenceError | None = None

    def save(self, state: GameState) -> bool:
        """Write a full snapshot, replacing the previous one. Returns True on success."""
        try:
            self.store.put(self.key, dump_snapshot(state))
        except PersistenceError as e:
            self.last_error = e
            logger.error(f"Failed to save game state: {e}")
            return False

        self.last_error = None
        logger.debug(f"Game state saved under {self.key!r}")
        return True

    def load(self, defaults: GameState) -> GameState | None:
        """
        Read the snapshot and merge it over `defaults`.
        Returns None if there is no snapshot or it can't be used.
        """
        try:
            payload = self.store.get(self.key)
            if payload is None:
                logger.info("No saved game found, starting fresh")
                return None
            snapshot = parse_snapshot(payload)
        except PersistenceError as e:
            self.last_error = e
            logger.error(f"Failed to load game state: {e}")
            return None

        if snapshot.schema_version > CURRENT_SCHEMA_VERSION:
            logger.warning(
                f"Snapshot schema version {snapshot.schema_version} is newer than "
                f"{CURRENT_SCHEMA_VERSION}; loading what is understood"
            )

        self.last_error = None
        logger.info("Game loaded")
        return state_from_snapshot(snapshot, defaults)

    def erase(self) -> bool:
        """Delete the snapshot. Returns True on success."""
        try:
            self.store.delete(self.key)
        except PersistenceError as e:
            self.last_error = e
            logger.error(f"Failed to erase saved game: {e}")
            return False

        self.last_error = None
        return True


def create_gateway(settings: Settings) -> PersistenceGateway:
    """Build a gateway over the store selected by `settings.storage_backend`."""
    if settings.storage_backend == "memory":
        store = MemoryStore()
    elif settings.storage_backend == "sqlite":
        engine = make_engine(settings.database_url, echo=settings.debug_mode)
        init_db(engine)
        store = SqlSnapshotStore(make_session_factory(engine))
    else:
        store = JsonFileStore(Path(settings.data_dir).expanduser())

    logger.info(f"Using {settings.storage_backend} snapshot store")
    return PersistenceGateway(store, key=settings.snapshot_key)

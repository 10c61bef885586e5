"""
Key-value blob stores for game snapshots.

Every store maps a string key to a string payload. Stores know nothing
about the payload format. Failures to reach the backing storage are
raised as PersistenceUnavailable; stored bytes that can't be decoded as
PersistenceCorrupt.
"""

import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from tree_garden.persistence.errors import PersistenceCorrupt, PersistenceUnavailable
from tree_garden.persistence.models import SnapshotRecord

logger = logging.getLogger(__name__)


@runtime_checkable
class SnapshotStore(Protocol):
    """Protocol every snapshot store implements."""

    def get(self, key: str) -> str | None:
        """Return the payload stored under `key`, or None if absent."""
        ...

    def put(self, key: str, payload: str) -> None:
        """Store `payload` under `key`, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove `key`. Deleting a missing key is not an error."""
        ...


class MemoryStore:
    """In-process store. Nothing survives the process; used by tests."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def put(self, key: str, payload: str) -> None:
        self._data[key] = payload

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStore:
    """
    One JSON file per key inside `directory`.
    Writes go to a temporary file that then replaces the target, so a crash
    mid-write never leaves a half-written snapshot behind.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise PersistenceCorrupt(f"{path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise PersistenceUnavailable(f"Cannot read {path}: {e}") from e

    def put(self, key: str, payload: str) -> None:
        target = self.path_for(key)
        tmp = target.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, target)
        except OSError as e:
            raise PersistenceUnavailable(f"Cannot write {target}: {e}") from e

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceUnavailable(f"Cannot delete {path}: {e}") from e


class SqlSnapshotStore:
    """Stores snapshots as rows of the `snapshots` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        try:
            with self._session_factory() as session:
                record = session.get(SnapshotRecord, key)
                return record.payload if record is not None else None
        except SQLAlchemyError as e:
            raise PersistenceUnavailable(f"Database read failed: {e}") from e

    def put(self, key: str, payload: str) -> None:
        try:
            with self._session_factory() as session:
                record = session.get(SnapshotRecord, key)
                if record is None:
                    session.add(SnapshotRecord(key=key, payload=payload))
                else:
                    record.payload = payload
                session.commit()
        except SQLAlchemyError as e:
            raise PersistenceUnavailable(f"Database write failed: {e}") from e

    def delete(self, key: str) -> None:
        try:
            with self._session_factory() as session:
                record = session.get(SnapshotRecord, key)
                if record is not None:
                    session.delete(record)
                    session.commit()
        except SQLAlchemyError as e:
            raise PersistenceUnavailable(f"Database delete failed: {e}") from e

"""
Snapshot model for the SQL-backed store.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tree_garden.database import Base


class SnapshotRecord(Base):
    """
    One stored blob per key.
    The payload is opaque to the database; the gateway owns its format.
    """

    __tablename__ = "snapshots"

    key: Mapped[str] = mapped_column(
        String(128),
        primary_key=True,
    )
    payload: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SnapshotRecord(key={self.key!r}, bytes={len(self.payload)})>"

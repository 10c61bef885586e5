"""
Database connection and session management for Tree Garden.
Uses SQLAlchemy with a synchronous engine; sqlite by default.
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for `database_url`."""
    # Sessions may be opened from a thread other than the one that created the engine
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    return create_engine(database_url, echo=echo)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to `engine`."""
    return sessionmaker(engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """
    Initialize database tables.
    Creates all tables defined in models if they don't exist.
    """
    # Import all models to ensure they're registered with Base
    from tree_garden.persistence import models  # noqa: F401

    Base.metadata.create_all(engine)

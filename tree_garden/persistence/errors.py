"""
Persistence errors.
"""


class PersistenceError(Exception):
    """Base class for anything that stops a snapshot from being read or written."""


class PersistenceUnavailable(PersistenceError):
    """The backing store could not be reached."""


class PersistenceCorrupt(PersistenceError):
    """A stored snapshot could not be parsed or failed validation."""

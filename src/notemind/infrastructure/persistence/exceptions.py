"""Errors raised by the SQLite note store."""


class PersistenceError(Exception):
    """The note store could not complete an operation."""


class DatabaseError(PersistenceError):
    """The SQLite database could not be prepared or reached.

    Raised by DatabaseManager; the original SQLAlchemy error is chained.
    """

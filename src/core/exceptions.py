"""Custom exception classes for School Manager.

This module defines application-specific exceptions following Google Python
Style Guide. Every error raised by the persistence layer derives from
SchoolManagerError so the console can report it and keep running.
"""


class SchoolManagerError(Exception):
    """Base exception for all School Manager errors."""

    pass


class DatabaseConnectionError(SchoolManagerError):
    """Raised when the backing database cannot be reached."""

    pass


class SchemaError(SchoolManagerError):
    """Raised when creating the relational schema fails."""

    pass


class QueryError(SchoolManagerError):
    """Raised when reading from the database fails."""

    pass


class PersistenceError(SchoolManagerError):
    """Raised when an insert, update or delete fails."""

    pass


class InvalidOperationError(SchoolManagerError):
    """Raised when an operation does not apply to a record's current state.

    Typical causes are deleting a record that was never saved, or relating
    a record that has no identity yet.
    """

    pass

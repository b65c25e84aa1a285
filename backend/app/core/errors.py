"""Startup failures recognised by the bootstrap sequence."""
from __future__ import annotations


class DatabaseConnectionError(Exception):
    """Raised when the initial database connection attempt fails."""


class DatabaseConnectionTimeout(DatabaseConnectionError):
    """Raised when no database server answered within the connection timeout."""

# Overview: Error kinds raised across the persistence boundary and by the bulk loader.


class SourceReadError(ValueError):
    """Raised when an import source is missing, unreadable or malformed."""


class StoreError(Exception):
    """Raised when the store fails to execute a statement (connectivity, bad data)."""


class ReferentialViolation(StoreError):
    """Raised when a save references a foreign row that does not exist."""

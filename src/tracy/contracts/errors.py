"""Exception taxonomy.

Structural problems (malformed records, misuse of a closed locker) raise.
Data anomalies such as circular dependencies or undeclared leads are
absorbed by the builder and reported through diagnostics instead.
"""

from typing import Any


class TracyError(Exception):
    """Base class for all tracy errors."""

    pass


class InvalidRecordError(TracyError, ValueError):
    """Raised when a dependency record is missing required fields or has wrong types.

    Fails fast at ingestion: a malformed record would otherwise corrupt the
    flat adjacency map for the rest of the run.

    Attributes:
        record: The offending payload, as received.
    """

    def __init__(self, message: str, record: Any = None) -> None:
        super().__init__(message)
        self.record = record


class LockerClosedError(TracyError, RuntimeError):
    """Raised when records are filed into, or finalized from, a closed locker."""

    pass

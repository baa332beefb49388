"""
Error kinds raised by the request handlers.

Every handler failure is a ``JourneyError`` carrying one ``ErrorKind``. The
API renders it as ``{"message": ...}`` with the status from ``STATUS_CODES``.

Usage:
    from journey.core.errors import JourneyError, ErrorKind

    raise JourneyError(ErrorKind.NOT_FOUND, "trip not found")
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_ID = "INVALID_ID"
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_CONFIRMED = "ALREADY_CONFIRMED"
    STORAGE_FAILURE = "STORAGE_FAILURE"


# The public surface reports every failure as a client error.
STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.INVALID_ID: 400,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 400,
    ErrorKind.ALREADY_CONFIRMED: 400,
    ErrorKind.STORAGE_FAILURE: 400,
}

DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_ID: "invalid uuid",
    ErrorKind.INVALID_INPUT: "invalid input",
    ErrorKind.NOT_FOUND: "not found",
    ErrorKind.ALREADY_CONFIRMED: "already confirmed",
    ErrorKind.STORAGE_FAILURE: "something went wrong, try again",
}


class JourneyError(Exception):
    """Base exception for all handler failures."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

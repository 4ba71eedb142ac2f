"""Error codes and exceptions raised by arenas."""

from __future__ import annotations

from enum import IntEnum


class ArenaErrorCode(IntEnum):
    """Codes describing the last failure seen by an arena."""

    NONE = 0
    OUT_OF_MEMORY = 1
    INVALID_ALIGNMENT = 2
    INVALID_SIZE = 3
    INVALID_ARENA = 4
    ARENA_NOT_ALLOCATED = 5
    ALLOCATION_TOO_LARGE = 6


_MESSAGES = {
    ArenaErrorCode.NONE: "No error",
    ArenaErrorCode.ARENA_NOT_ALLOCATED: "Failed to allocate arena",
    ArenaErrorCode.OUT_OF_MEMORY: "Out of Memory",
    ArenaErrorCode.INVALID_ALIGNMENT: "Invalid Alignment",
    ArenaErrorCode.INVALID_SIZE: "Invalid size",
    ArenaErrorCode.INVALID_ARENA: "Invalid arena",
    ArenaErrorCode.ALLOCATION_TOO_LARGE: "Allocation too large",
}


def error_string(code: int) -> str:
    """Return a human-readable description of an error code."""
    try:
        return _MESSAGES[ArenaErrorCode(code)]
    except ValueError:
        return "Unknown error"


class ArenaError(Exception):
    """Base class for arena failures; carries an ``ArenaErrorCode``."""

    code: ArenaErrorCode = ArenaErrorCode.NONE

    def __init__(self, message: str | None = None, code: ArenaErrorCode | None = None) -> None:
        if code is not None:
            self.code = ArenaErrorCode(code)
        super().__init__(message if message is not None else error_string(self.code))


class OutOfMemoryError(ArenaError):
    """The arena could not obtain or grow memory."""

    code = ArenaErrorCode.OUT_OF_MEMORY


class InvalidAlignmentError(ArenaError):
    """An alignment was not a power of two."""

    code = ArenaErrorCode.INVALID_ALIGNMENT


class InvalidSizeError(ArenaError):
    """A size was zero or otherwise unusable."""

    code = ArenaErrorCode.INVALID_SIZE


class InvalidArenaError(ArenaError):
    """The arena is unusable, destroyed or misconfigured."""

    code = ArenaErrorCode.INVALID_ARENA
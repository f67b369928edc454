from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    NOT_IN_HAND = "NotInHand"
    NO_SUCH_GROUP = "NoSuchGroup"
    GROUP_TOO_SMALL = "GroupTooSmall"
    INVALID_GROUP = "InvalidGroup"
    INITIAL_MELD_TOO_LOW = "InitialMeldTooLow"
    EMPTY_POOL = "EmptyPool"
    NO_SAVED_STATE = "NoSavedState"
    NOT_ON_BOARD = "NotOnBoard"
    TILE_LOCKED = "TileLocked"
    CORRUPT_SAVE = "CorruptSave"


class RummyError(ValueError):
    """Base class for every rejected operation.

    The operation that raised it has left the game state untouched.
    """

    kind: ErrorKind

    def __init__(self, message: str = "", group_index: Optional[int] = None) -> None:
        super().__init__(message or self.kind.value)
        self.message = message or self.kind.value
        self.group_index = group_index

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class NotInHand(RummyError):
    kind = ErrorKind.NOT_IN_HAND


class NoSuchGroup(RummyError):
    kind = ErrorKind.NO_SUCH_GROUP


class GroupTooSmall(RummyError):
    kind = ErrorKind.GROUP_TOO_SMALL


class InvalidGroup(RummyError):
    kind = ErrorKind.INVALID_GROUP


class InitialMeldTooLow(RummyError):
    kind = ErrorKind.INITIAL_MELD_TOO_LOW


class EmptyPool(RummyError):
    kind = ErrorKind.EMPTY_POOL


class NoSavedState(RummyError):
    kind = ErrorKind.NO_SAVED_STATE


class NotOnBoard(RummyError):
    kind = ErrorKind.NOT_ON_BOARD


class TileLocked(RummyError):
    kind = ErrorKind.TILE_LOCKED


class CorruptSave(RummyError):
    kind = ErrorKind.CORRUPT_SAVE

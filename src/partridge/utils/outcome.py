"""Explicit success/failure values returned by every board mutation."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

if TYPE_CHECKING:
    from partridge.components.placed_square import PlacedSquare

T = TypeVar("T")


class Rejection(Enum):
    """Reason a requested mutation was not applied."""
    INVENTORY_EXHAUSTED = "inventory_exhausted"
    INVENTORY_OVERFLOW = "inventory_overflow"
    INVALID_PLACEMENT = "invalid_placement"
    SQUARE_LOCKED = "square_locked"
    NOT_FOUND = "not_found"


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Result of an all-or-nothing operation.

    value: the resulting state (the untouched input state when rejected).
    rejection: None on success, otherwise why nothing changed.
    square: the placed square affected by the operation, when there is one.
    """
    value: T
    rejection: Optional[Rejection] = None
    square: Optional[PlacedSquare] = None

    @property
    def ok(self) -> bool:
        return self.rejection is None


def accepted(value: T, square: Optional[PlacedSquare] = None) -> Outcome[T]:
    return Outcome(value=value, square=square)


def rejected(value: T, reason: Rejection, square: Optional[PlacedSquare] = None) -> Outcome[T]:
    return Outcome(value=value, rejection=reason, square=square)

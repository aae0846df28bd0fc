from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from partridge.constants import SQUARE_SIZES
from partridge.utils.outcome import Outcome, Rejection, accepted, rejected


@dataclass(frozen=True, slots=True)
class SquareCount:
    """Stock for one square size. The puzzle grants exactly `size` squares of each size."""
    size: int
    total: int
    remaining: int

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0


@dataclass(frozen=True, slots=True)
class InventoryTracker:
    """Remaining/total counts per square size.

    counts: one SquareCount per size, ordered by size.
    Operations never mutate; they return an Outcome carrying the new tracker
    (or this tracker unchanged when rejected).
    """
    counts: Tuple[SquareCount, ...]

    @classmethod
    def initialize(cls, sizes: Iterable[int] = SQUARE_SIZES) -> "InventoryTracker":
        return cls(counts=tuple(SquareCount(size=s, total=s, remaining=s) for s in sorted(set(sizes))))

    def sizes(self) -> Tuple[int, ...]:
        return tuple(c.size for c in self.counts)

    def count_for(self, size: int) -> SquareCount | None:
        for count in self.counts:
            if count.size == size:
                return count
        return None

    def remaining(self, size: int) -> int:
        count = self.count_for(size)
        return count.remaining if count is not None else 0

    def total(self, size: int) -> int:
        count = self.count_for(size)
        return count.total if count is not None else 0

    def is_exhausted(self) -> bool:
        return all(c.exhausted for c in self.counts)

    def decrement(self, size: int) -> Outcome[InventoryTracker]:
        count = self.count_for(size)
        if count is None or count.remaining == 0:
            return rejected(self, Rejection.INVENTORY_EXHAUSTED)
        return accepted(self._with(replace(count, remaining=count.remaining - 1)))

    def increment(self, size: int) -> Outcome[InventoryTracker]:
        count = self.count_for(size)
        if count is None or count.remaining == count.total:
            return rejected(self, Rejection.INVENTORY_OVERFLOW)
        return accepted(self._with(replace(count, remaining=count.remaining + 1)))

    def reset(self) -> "InventoryTracker":
        return InventoryTracker.initialize(self.sizes())

    def _with(self, updated: SquareCount) -> "InventoryTracker":
        return InventoryTracker(
            counts=tuple(updated if c.size == updated.size else c for c in self.counts)
        )

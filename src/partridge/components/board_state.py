from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from partridge.components.inventory import InventoryTracker
from partridge.components.placed_square import PlacedSquare
from partridge.constants import GRID_SIZE
from partridge.systems.placement import check_cell
from partridge.utils.outcome import Outcome, Rejection, accepted, rejected


@dataclass(frozen=True, slots=True)
class BoardState:
    """Authoritative set of placed squares together with the inventory they draw from.

    Every mutating operation is all-or-nothing and returns an Outcome; on
    rejection the outcome carries this very instance, so callers can always
    adopt ``outcome.value``.

    Invariants held by construction:
      * no two squares' cell rectangles intersect;
      * every square lies within [0, grid_size) on both axes;
      * inventory.remaining(size) + placed_count(size) == inventory.total(size).
    """
    grid_size: int = GRID_SIZE
    squares: Tuple[PlacedSquare, ...] = ()
    inventory: InventoryTracker = field(default_factory=InventoryTracker.initialize)
    next_serial: int = 1

    # ------------------------------------------------------------------ queries
    def find(self, square_id: str) -> Optional[PlacedSquare]:
        for square in self.squares:
            if square.id == square_id:
                return square
        return None

    def square_at_cell(self, cx: int, cy: int) -> Optional[PlacedSquare]:
        for square in self.squares:
            if square.contains_cell(cx, cy):
                return square
        return None

    def placed_count(self, size: int) -> int:
        return sum(1 for s in self.squares if s.size == size)

    def remaining(self, size: int) -> int:
        return self.inventory.remaining(size)

    def is_complete(self) -> bool:
        """Every square of every size is on the board."""
        return bool(self.squares) and self.inventory.is_exhausted()

    def reserve_id(self, size: int) -> Tuple[str, "BoardState"]:
        """Mint a session-unique identifier and return it with the advanced board."""
        square_id = f"square-{size}-{self.next_serial}"
        return square_id, replace(self, next_serial=self.next_serial + 1)

    # ---------------------------------------------------------------- mutations
    def place(self, size: int, x: int, y: int, square_id: Optional[str] = None) -> Outcome[BoardState]:
        if size not in self.inventory.sizes():
            return rejected(self, Rejection.INVALID_PLACEMENT)
        taken = self.inventory.decrement(size)
        if not taken.ok:
            return rejected(self, taken.rejection)
        if not check_cell(x, y, size, self.grid_size, self.squares).valid:
            return rejected(self, Rejection.INVALID_PLACEMENT)
        board = self
        if square_id is None:
            square_id, board = self.reserve_id(size)
        elif self.find(square_id) is not None:
            return rejected(self, Rejection.INVALID_PLACEMENT)
        square = PlacedSquare(id=square_id, size=size, x=x, y=y, locked=False)
        return accepted(
            replace(board, squares=self.squares + (square,), inventory=taken.value),
            square,
        )

    def move(self, square_id: str, x: int, y: int) -> Outcome[BoardState]:
        square = self.find(square_id)
        if square is None:
            return rejected(self, Rejection.NOT_FOUND)
        if square.locked:
            return rejected(self, Rejection.SQUARE_LOCKED, square)
        if not check_cell(x, y, square.size, self.grid_size, self.squares, exclude_id=square_id).valid:
            return rejected(self, Rejection.INVALID_PLACEMENT, square)
        moved = square.moved_to(x, y)
        return accepted(self._replace_square(moved), moved)

    def remove(self, square_id: str) -> Outcome[BoardState]:
        square = self.find(square_id)
        if square is None:
            return rejected(self, Rejection.NOT_FOUND)
        if square.locked:
            return rejected(self, Rejection.SQUARE_LOCKED, square)
        returned = self.inventory.increment(square.size)
        if not returned.ok:
            return rejected(self, returned.rejection, square)
        return accepted(
            replace(
                self,
                squares=tuple(s for s in self.squares if s.id != square_id),
                inventory=returned.value,
            ),
            square,
        )

    def toggle_lock(self, square_id: str) -> Outcome[BoardState]:
        square = self.find(square_id)
        if square is None:
            return rejected(self, Rejection.NOT_FOUND)
        flipped = square.with_lock(not square.locked)
        return accepted(self._replace_square(flipped), flipped)

    def reset(self) -> "BoardState":
        # next_serial survives so identifiers stay unique for the whole session.
        return replace(self, squares=(), inventory=self.inventory.reset())

    def _replace_square(self, updated: PlacedSquare) -> "BoardState":
        return replace(
            self,
            squares=tuple(updated if s.id == updated.id else s for s in self.squares),
        )

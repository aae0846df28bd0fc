from dataclasses import dataclass, replace

@dataclass(frozen=True, slots=True)
class PlacedSquare:
    """A square committed to the board.

    (x, y) is the top-left grid cell; the square covers
    [x, x + size) x [y, y + size).
    """
    id: str
    size: int
    x: int
    y: int
    locked: bool = False

    @property
    def right(self) -> int:
        return self.x + self.size

    @property
    def bottom(self) -> int:
        return self.y + self.size

    def contains_cell(self, cx: int, cy: int) -> bool:
        return self.x <= cx < self.right and self.y <= cy < self.bottom

    def moved_to(self, x: int, y: int) -> "PlacedSquare":
        return replace(self, x=x, y=y)

    def with_lock(self, locked: bool) -> "PlacedSquare":
        return replace(self, locked=locked)

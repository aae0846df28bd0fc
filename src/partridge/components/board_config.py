from dataclasses import dataclass, field
from typing import Tuple

from partridge.constants import CELL_SIZE, GRID_SIZE, SQUARE_SIZES

@dataclass(frozen=True, slots=True)
class BoardConfig:
    """Singleton component describing the board geometry and the square sizes in play.

    cell_size is the reference pixel size of one grid cell. Pointer events
    reach the puzzle expressed at this size whatever the window scaling.
    """
    grid_size: int = GRID_SIZE
    cell_size: int = CELL_SIZE
    sizes: Tuple[int, ...] = field(default=SQUARE_SIZES)

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if not self.sizes:
            raise ValueError("at least one square size is required")
        for size in self.sizes:
            if size <= 0 or size > self.grid_size:
                raise ValueError(f"square size {size} does not fit a {self.grid_size}-cell board")

    @property
    def board_area(self) -> int:
        return self.grid_size * self.grid_size

    def tiling_area(self) -> int:
        """Area covered when every square of every size is placed (n squares of size n)."""
        return sum(size ** 3 for size in self.sizes)

    def is_exact_tiling(self) -> bool:
        """True when the full inventory covers the board exactly (45^2 == 1^3 + ... + 9^3)."""
        return self.tiling_area() == self.board_area

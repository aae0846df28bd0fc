"""Placement geometry: snapping a pointer to the grid, clamping, bounds and overlap checks.

Everything here is pure. The same functions feed the live drag preview on
every pointer move and the authoritative check at drop time.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from partridge.components.placed_square import PlacedSquare

Cell = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class Placement:
    """Candidate top-left cell for a square plus whether it may be committed there."""
    x: int
    y: int
    valid: bool


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _bound_pointer(value: float, span: float) -> float:
    """Pull a stray (even infinite) coordinate back to within one board of the edges."""
    if math.isnan(value):
        raise ValueError("pointer coordinate is NaN")
    return max(-span, min(value, 2 * span))


def snap_to_cell(pointer_x: float, pointer_y: float, size: int, cell_size: float) -> Cell:
    """Top-left cell that centres a square of `size` under the pointer."""
    half = (size * cell_size) / 2
    return (
        _round_half_up((pointer_x - half) / cell_size),
        _round_half_up((pointer_y - half) / cell_size),
    )


def clamp_cell(x: int, y: int, size: int, grid_size: int) -> Cell:
    """Clamp each axis independently into [0, grid_size - size]."""
    limit = grid_size - size
    return (max(0, min(x, limit)), max(0, min(y, limit)))


def fits_in_bounds(x: int, y: int, size: int, grid_size: int) -> bool:
    return x >= 0 and y >= 0 and x + size <= grid_size and y + size <= grid_size


def rects_overlap(ax: int, ay: int, asize: int, bx: int, by: int, bsize: int) -> bool:
    # Overlap unless fully separated on the x-axis or on the y-axis.
    return not (
        ax >= bx + bsize
        or ax + asize <= bx
        or ay >= by + bsize
        or ay + asize <= by
    )


def find_overlap(
    x: int,
    y: int,
    size: int,
    squares: Iterable[PlacedSquare],
    exclude_id: Optional[str] = None,
) -> Optional[PlacedSquare]:
    """First square (other than exclude_id) whose cells intersect the candidate."""
    for square in squares:
        if exclude_id is not None and square.id == exclude_id:
            continue
        if rects_overlap(x, y, size, square.x, square.y, square.size):
            return square
    return None


def check_cell(
    x: int,
    y: int,
    size: int,
    grid_size: int,
    squares: Iterable[PlacedSquare],
    exclude_id: Optional[str] = None,
) -> Placement:
    """Validate an explicit grid cell (no snapping, no clamping)."""
    bounds_ok = fits_in_bounds(x, y, size, grid_size)
    overlap = bounds_ok and find_overlap(x, y, size, squares, exclude_id) is not None
    return Placement(x=x, y=y, valid=bounds_ok and not overlap)


def validate_pointer(
    pointer_x: float,
    pointer_y: float,
    size: int,
    cell_size: float,
    grid_size: int,
    squares: Iterable[PlacedSquare],
    exclude_id: Optional[str] = None,
) -> Placement:
    """Snap, clamp, then bounds- and overlap-check a board-local pointer position."""
    span = grid_size * cell_size
    raw_x, raw_y = snap_to_cell(
        _bound_pointer(pointer_x, span),
        _bound_pointer(pointer_y, span),
        size,
        cell_size,
    )
    x, y = clamp_cell(raw_x, raw_y, size, grid_size)
    return check_cell(x, y, size, grid_size, squares, exclude_id)

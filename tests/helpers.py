from __future__ import annotations

from partridge.components.board_state import BoardState
from partridge.constants import CELL_SIZE


def pointer_for_cell(x: int, y: int, size: int, cell_size: float = CELL_SIZE) -> tuple[float, float]:
    """Board-local pointer position that snaps a square of `size` onto top-left cell (x, y)."""
    half = size * cell_size / 2
    return x * cell_size + half, y * cell_size + half


def place_square(board: BoardState, size: int, x: int, y: int) -> BoardState:
    """Place a square and fail the test if the board rejects it."""
    outcome = board.place(size, x, y)
    assert outcome.ok, f"placing size {size} at ({x},{y}) rejected: {outcome.rejection}"
    return outcome.value

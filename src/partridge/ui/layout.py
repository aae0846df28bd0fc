from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from partridge.components.board_config import BoardConfig
from partridge.components.placed_square import PlacedSquare
from partridge.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    MIN_CELL_SIZE,
    RESET_BUTTON_GAP,
    RESET_BUTTON_HEIGHT,
    RESET_BUTTON_WIDTH,
    TOOLBAR_GAP,
    TOOLBAR_MAX_DISPLAY,
    TOOLBAR_MIN_DISPLAY,
    TOOLBAR_SCALE,
    TOOLBAR_SLOT_SIZE,
    TOOLBAR_SLOT_SPACING,
    TOP_MARGIN,
)

Rect = Tuple[float, float, float, float]  # left, bottom, width, height (window coordinates)


def toolbar_display_size(size: int) -> int:
    """Icon size for a toolbar square: proportional, but grabbable and bounded."""
    return max(TOOLBAR_MIN_DISPLAY, min(size * TOOLBAR_SCALE, TOOLBAR_MAX_DISPLAY))


@dataclass(frozen=True, slots=True)
class ToolbarSlot:
    size: int
    center_x: float
    center_y: float
    box: float
    display: int

    def contains(self, x: float, y: float) -> bool:
        half = self.box / 2
        return (
            self.center_x - half <= x <= self.center_x + half
            and self.center_y - half <= y <= self.center_y + half
        )


@dataclass(frozen=True, slots=True)
class BoardLayout:
    """Window placement of the board, the inventory toolbar and the Clear Board button.

    Window coordinates have their origin at the bottom-left (arcade); board-local
    coordinates start at the board's top-left corner and grow downward, expressed
    at the configured reference cell size so the engine never sees window scaling.
    """
    grid_size: int
    cell_size: int
    reference_cell_size: int
    left: float
    bottom: float
    toolbar: Tuple[ToolbarSlot, ...]
    reset_button: Rect

    @property
    def board_pixels(self) -> int:
        return self.grid_size * self.cell_size

    @property
    def top(self) -> float:
        return self.bottom + self.board_pixels

    @property
    def right(self) -> float:
        return self.left + self.board_pixels

    @property
    def scale(self) -> float:
        return self.reference_cell_size / self.cell_size

    def contains_board_point(self, x: float, y: float) -> bool:
        return self.left <= x < self.right and self.bottom < y <= self.top

    def to_board_local(self, x: float, y: float) -> Tuple[float, float]:
        return (x - self.left) * self.scale, (self.top - y) * self.scale

    def cell_at(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        if not self.contains_board_point(x, y):
            return None
        cx = int(math.floor((x - self.left) / self.cell_size))
        cy = int(math.floor((self.top - y) / self.cell_size))
        return min(cx, self.grid_size - 1), min(cy, self.grid_size - 1)

    def square_rect(self, square: PlacedSquare) -> Rect:
        return self.cell_rect(square.x, square.y, square.size)

    def cell_rect(self, x: int, y: int, size: int) -> Rect:
        side = size * self.cell_size
        return (
            self.left + x * self.cell_size,
            self.top - (y + size) * self.cell_size,
            side,
            side,
        )

    def toolbar_slot_at(self, x: float, y: float) -> Optional[ToolbarSlot]:
        for slot in self.toolbar:
            if slot.contains(x, y):
                return slot
        return None

    def reset_button_contains(self, x: float, y: float) -> bool:
        left, bottom, width, height = self.reset_button
        return left <= x <= left + width and bottom <= y <= bottom + height


def compute_layout(window_width: int, window_height: int, config: BoardConfig) -> BoardLayout:
    """Fit the board (plus toolbar column) into the window, largest whole-pixel cell first."""
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - TOP_MARGIN) * BOARD_MAX_HEIGHT_PCT
    cell_by_w = max_board_w / config.grid_size
    cell_by_h = max_board_h / config.grid_size
    cell_size = int(min(cell_by_w, cell_by_h))
    if cell_size < MIN_CELL_SIZE:
        cell_size = MIN_CELL_SIZE
    board_px = cell_size * config.grid_size
    total_width = board_px + TOOLBAR_GAP + TOOLBAR_SLOT_SIZE
    left = max(0.0, (window_width - total_width) / 2)
    bottom = float(BOTTOM_MARGIN)
    top = bottom + board_px

    count = len(config.sizes)
    pitch = min(TOOLBAR_SLOT_SIZE + TOOLBAR_SLOT_SPACING, board_px / count)
    box = min(TOOLBAR_SLOT_SIZE, pitch)
    center_x = left + board_px + TOOLBAR_GAP + TOOLBAR_SLOT_SIZE / 2
    slots = tuple(
        ToolbarSlot(
            size=size,
            center_x=center_x,
            center_y=top - box / 2 - i * pitch,
            box=box,
            display=toolbar_display_size(size),
        )
        for i, size in enumerate(config.sizes)
    )
    reset_button = (left, top + RESET_BUTTON_GAP, float(RESET_BUTTON_WIDTH), float(RESET_BUTTON_HEIGHT))
    return BoardLayout(
        grid_size=config.grid_size,
        cell_size=cell_size,
        reference_cell_size=config.cell_size,
        left=left,
        bottom=bottom,
        toolbar=slots,
        reset_button=reset_button,
    )

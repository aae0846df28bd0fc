from typing import Any, Dict, List, Optional

from esper import World

from partridge.components.placed_square import PlacedSquare
from partridge.constants import (
    BOARD_BACKGROUND_COLOR,
    EXHAUSTED_COLOR,
    GRID_LINE_COLOR,
    LOCKED_ALPHA,
    PREVIEW_ALPHA,
    PREVIEW_INVALID_COLOR,
    PREVIEW_VALID_COLOR,
    SQUARE_COLORS,
)
from partridge.events.bus import EventBus, EVENT_BOARD_RESET, EVENT_PUZZLE_COMPLETED
from partridge.ui.layout import BoardLayout, Rect, compute_layout
from partridge.world import get_config, get_puzzle

TEXT_COLOR = (30, 30, 30)
BUTTON_COLOR = (71, 85, 105)
BUTTON_TEXT_COLOR = (255, 255, 255)
SLOT_BACKGROUND_COLOR = (235, 237, 240)
LOCK_OUTLINE_COLOR = (15, 23, 42)


class RenderSystem:
    """Draws the board, placed squares, drag preview, toolbar and Clear Board button.

    Layout and per-frame draw data are cached even when no arcade window is
    active, so the frame can be inspected headless.
    """
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.layout: Optional[BoardLayout] = None
        self.completed = False
        self._last_window_size: Optional[tuple] = None
        self._square_rects: Dict[str, Rect] = {}
        self._toolbar_cache: List[Dict[str, Any]] = []
        self._preview_rect: Optional[Rect] = None
        self.event_bus.subscribe(EVENT_PUZZLE_COMPLETED, self.on_puzzle_completed)
        self.event_bus.subscribe(EVENT_BOARD_RESET, self.on_board_reset)

    def notify_resize(self, width: int, height: int):
        self._last_window_size = (width, height)
        self.layout = compute_layout(width, height, get_config(self.world))

    def on_puzzle_completed(self, sender, **kwargs):
        self.completed = True

    def on_board_reset(self, sender, **kwargs):
        self.completed = False

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        if self.layout is None or (self.window.width, self.window.height) != self._last_window_size:
            self.notify_resize(self.window.width, self.window.height)
        layout = self.layout
        state = get_puzzle(self.world).state
        board = state.board

        self._square_rects = {square.id: layout.square_rect(square) for square in board.squares}
        preview = state.preview
        self._preview_rect = (
            layout.cell_rect(preview.x, preview.y, preview.size) if preview is not None else None
        )
        self._toolbar_cache = [
            {
                "size": slot.size,
                "remaining": board.remaining(slot.size),
                "exhausted": board.remaining(slot.size) <= 0,
                "label": f"{board.remaining(slot.size)} left",
                "center_x": slot.center_x,
                "center_y": slot.center_y,
                "display": slot.display,
                "box": slot.box,
            }
            for slot in layout.toolbar
        ]
        if headless:
            return

        self._draw_board(arcade, layout)
        for square in board.squares:
            self._draw_square(arcade, square, self._square_rects[square.id])
        if preview is not None:
            base = PREVIEW_VALID_COLOR if preview.valid else PREVIEW_INVALID_COLOR
            left, bottom, width, height = self._preview_rect
            arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, base + (PREVIEW_ALPHA,))
            arcade.draw_lbwh_rectangle_outline(left, bottom, width, height, base, 2)
        self._draw_toolbar(arcade)
        self._draw_reset_button(arcade, layout)
        if self.completed:
            arcade.draw_text(
                "Puzzle complete!",
                layout.right - 4,
                layout.top + 20,
                TEXT_COLOR,
                16,
                anchor_x="right",
            )

    def _draw_board(self, arcade, layout: BoardLayout) -> None:
        arcade.draw_lbwh_rectangle_filled(
            layout.left, layout.bottom, layout.board_pixels, layout.board_pixels, BOARD_BACKGROUND_COLOR
        )
        for i in range(layout.grid_size + 1):
            offset = i * layout.cell_size
            arcade.draw_line(layout.left + offset, layout.bottom, layout.left + offset, layout.top, GRID_LINE_COLOR, 1)
            arcade.draw_line(layout.left, layout.bottom + offset, layout.right, layout.bottom + offset, GRID_LINE_COLOR, 1)

    def _draw_square(self, arcade, square: PlacedSquare, rect: Rect) -> None:
        left, bottom, width, height = rect
        color = SQUARE_COLORS.get(square.size, EXHAUSTED_COLOR)
        if square.locked:
            arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, color + (LOCKED_ALPHA,))
            arcade.draw_lbwh_rectangle_outline(left, bottom, width, height, LOCK_OUTLINE_COLOR, 2)
        else:
            arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, color)

    def _draw_toolbar(self, arcade) -> None:
        for entry in self._toolbar_cache:
            display = entry["display"]
            cx = entry["center_x"]
            cy = entry["center_y"]
            box = entry["box"]
            arcade.draw_lbwh_rectangle_filled(cx - box / 2, cy - box / 2, box, box, SLOT_BACKGROUND_COLOR)
            color = EXHAUSTED_COLOR if entry["exhausted"] else SQUARE_COLORS.get(entry["size"], EXHAUSTED_COLOR)
            arcade.draw_lbwh_rectangle_filled(cx - display / 2, cy - display / 2, display, display, color)
            if entry["exhausted"]:
                arcade.draw_text("✓", cx, cy, TEXT_COLOR, 18, anchor_x="center", anchor_y="center")
            arcade.draw_text(entry["label"], cx + 32, cy - 6, TEXT_COLOR, 12, anchor_x="left")

    def _draw_reset_button(self, arcade, layout: BoardLayout) -> None:
        left, bottom, width, height = layout.reset_button
        arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, BUTTON_COLOR)
        arcade.draw_text(
            "Clear Board",
            left + width / 2,
            bottom + height / 2,
            BUTTON_TEXT_COLOR,
            13,
            anchor_x="center",
            anchor_y="center",
        )

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from esper import World

from partridge.components.placed_square import PlacedSquare
from partridge.constants import (
    DOUBLE_CLICK_DISTANCE,
    DOUBLE_CLICK_INTERVAL,
    DRAG_START_DISTANCE,
    KEY_ESCAPE,
    MOUSE_BUTTON_LEFT,
    MOUSE_BUTTON_RIGHT,
)
from partridge.events.bus import (
    EventBus,
    EVENT_BOARD_RESET_REQUEST,
    EVENT_DRAG_CANCEL,
    EVENT_DRAG_DROP,
    EVENT_DRAG_PICK_UP,
    EVENT_KEY_PRESS,
    EVENT_MOUSE_LEAVE,
    EVENT_MOUSE_MOVE,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_RELEASE,
    EVENT_POINTER_MOVE,
    EVENT_SQUARE_LOCK_TOGGLE,
    EVENT_SQUARE_REMOVE_REQUEST,
)
from partridge.ui.layout import BoardLayout, compute_layout
from partridge.utils.click_tracker import ClickTracker
from partridge.world import get_config, get_puzzle


@dataclass(slots=True)
class PendingPress:
    """Left press that becomes a drag once the pointer travels far enough."""
    x: float
    y: float
    size: int
    square_id: Optional[str] = None
    draggable: bool = True


class InputSystem:
    """Turns raw window mouse/keyboard events into puzzle commands.

    Window coordinates (origin bottom-left) are converted to board-local
    coordinates before they reach the puzzle.
    """
    def __init__(self, event_bus: EventBus, window, world: World, *, clicks: ClickTracker | None = None):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.clicks = clicks or ClickTracker(
            max_interval=DOUBLE_CLICK_INTERVAL,
            max_distance=DOUBLE_CLICK_DISTANCE,
        )
        self.pending: Optional[PendingPress] = None
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_MOUSE_RELEASE, self.on_mouse_release)
        self.event_bus.subscribe(EVENT_MOUSE_MOVE, self.on_mouse_move)
        self.event_bus.subscribe(EVENT_MOUSE_LEAVE, self.on_mouse_leave)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def layout(self) -> BoardLayout:
        return compute_layout(self.window.width, self.window.height, get_config(self.world))

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        if self._dragging():
            return
        layout = self.layout()
        if button == MOUSE_BUTTON_RIGHT:
            square = self._square_at(layout, x, y)
            if square is not None:
                self.event_bus.emit(EVENT_SQUARE_REMOVE_REQUEST, square_id=square.id)
            return
        if button != MOUSE_BUTTON_LEFT:
            return
        self.pending = None
        if layout.reset_button_contains(x, y):
            self.event_bus.emit(EVENT_BOARD_RESET_REQUEST)
            return
        slot = layout.toolbar_slot_at(x, y)
        if slot is not None:
            # Exhausted sizes are not draggable.
            if get_puzzle(self.world).state.board.remaining(slot.size) > 0:
                self.pending = PendingPress(x=x, y=y, size=slot.size)
            return
        square = self._square_at(layout, x, y)
        if square is not None:
            self.pending = PendingPress(
                x=x,
                y=y,
                size=square.size,
                square_id=square.id,
                draggable=not square.locked,
            )

    def on_mouse_move(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        if self._dragging():
            self._emit_pointer(EVENT_POINTER_MOVE, x, y)
            return
        pending = self.pending
        if pending is None or not pending.draggable:
            return
        if math.hypot(x - pending.x, y - pending.y) < DRAG_START_DISTANCE:
            return
        self.pending = None
        self.event_bus.emit(EVENT_DRAG_PICK_UP, size=pending.size, square_id=pending.square_id)
        if self._dragging():
            self._emit_pointer(EVENT_POINTER_MOVE, x, y)

    def on_mouse_release(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None or button != MOUSE_BUTTON_LEFT:
            return
        if self._dragging():
            self.pending = None
            self._emit_pointer(EVENT_DRAG_DROP, x, y)
            return
        pending = self.pending
        self.pending = None
        if pending is None or pending.square_id is None:
            return
        if self.clicks.is_double(x, y, button, target=pending.square_id):
            self.event_bus.emit(EVENT_SQUARE_LOCK_TOGGLE, square_id=pending.square_id)

    def on_mouse_leave(self, sender, **kwargs):
        self.pending = None
        if self._dragging():
            self.event_bus.emit(EVENT_DRAG_CANCEL, reason='pointer_left')

    def on_key_press(self, sender, **kwargs):
        if kwargs.get('symbol') == KEY_ESCAPE and self._dragging():
            self.pending = None
            self.event_bus.emit(EVENT_DRAG_CANCEL, reason='escape')

    def _emit_pointer(self, name: str, x: float, y: float) -> None:
        local_x, local_y = self.layout().to_board_local(x, y)
        self.event_bus.emit(name, x=local_x, y=local_y)

    def _dragging(self) -> bool:
        return get_puzzle(self.world).state.drag is not None

    def _square_at(self, layout: BoardLayout, x: float, y: float) -> Optional[PlacedSquare]:
        cell = layout.cell_at(x, y)
        if cell is None:
            return None
        return get_puzzle(self.world).state.board.square_at_cell(*cell)

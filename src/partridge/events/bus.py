from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# RAW WINDOW INPUT
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"        # payload: x, y, button
EVENT_MOUSE_RELEASE = "mouse_release"    # payload: x, y, button
EVENT_MOUSE_MOVE = "mouse_move"          # payload: x, y, dx, dy
EVENT_MOUSE_LEAVE = "mouse_leave"        # payload: x, y
EVENT_KEY_PRESS = "key_press"            # payload: symbol, modifiers


# ============================================================================
# PUZZLE COMMANDS (board-local pixel coordinates, origin top-left)
# ============================================================================
EVENT_DRAG_PICK_UP = "drag_pick_up"                    # payload: size=int, square_id=str|None
EVENT_POINTER_MOVE = "pointer_move"                    # payload: x=float, y=float
EVENT_DRAG_DROP = "drag_drop"                          # payload: x=float, y=float
EVENT_DRAG_CANCEL = "drag_cancel"                      # payload: reason=str
EVENT_SQUARE_REMOVE_REQUEST = "square_remove_request"  # payload: square_id=str
EVENT_SQUARE_LOCK_TOGGLE = "square_lock_toggle"        # payload: square_id=str
EVENT_BOARD_RESET_REQUEST = "board_reset_request"      # payload: (none)


# ============================================================================
# DRAG LIFECYCLE
# ============================================================================
EVENT_DRAG_STARTED = "drag_started"                  # payload: size=int, square_id=str, source=str
EVENT_DRAG_PREVIEW_CHANGED = "drag_preview_changed"  # payload: preview=DragPreview|None
EVENT_DRAG_ENDED = "drag_ended"                      # payload: reason=str


# ============================================================================
# BOARD OUTCOMES
# ============================================================================
EVENT_SQUARE_PLACED = "square_placed"              # payload: square_id, size, x, y, remaining, total_squares
EVENT_SQUARE_REPOSITIONED = "square_repositioned"  # payload: square_id, size, x, y, remaining, total_squares
EVENT_SQUARE_REMOVED = "square_removed"            # payload: square_id, size, remaining, total_squares
EVENT_SQUARE_LOCK_CHANGED = "square_lock_changed"  # payload: square_id, size, locked
EVENT_BOARD_RESET = "board_reset"                  # payload: squares_placed, total_squares
EVENT_PUZZLE_COMPLETED = "puzzle_completed"        # payload: total_squares
EVENT_ACTION_REJECTED = "action_rejected"          # payload: action=str, reason=Rejection, size=int|None, square_id=str|None


# ============================================================================
# APPLICATION
# ============================================================================
EVENT_APP_LOADED = "app_loaded"    # payload: width, height

from __future__ import annotations

import math
from typing import Optional

from esper import World

from partridge.components.board_state import BoardState
from partridge.components.drag_session import DragPreview
from partridge.events.bus import (
    EventBus,
    EVENT_BOARD_RESET_REQUEST,
    EVENT_DRAG_CANCEL,
    EVENT_DRAG_DROP,
    EVENT_DRAG_PICK_UP,
    EVENT_POINTER_MOVE,
    EVENT_SQUARE_LOCK_TOGGLE,
    EVENT_SQUARE_REMOVE_REQUEST,
)
from partridge.systems.reducer import (
    CancelDrag,
    Drop,
    PickUp,
    PointerMove,
    PuzzleEvent,
    PuzzleState,
    RequestRemove,
    ResetBoard,
    Step,
    ToggleLock,
    reduce,
)
from partridge.world import get_puzzle


class PuzzleSystem:
    """Routes puzzle commands from the bus through the reducer.

    Logic:
      - Each command event becomes a reducer event; the resulting state
        replaces the one stored on the Puzzle component.
      - Notices produced by the transition are re-emitted on the bus
        (placed / repositioned / removed / reset / rejections / drag lifecycle).
      - Malformed payloads (missing, non-numeric or non-finite fields) are ignored.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_DRAG_PICK_UP, self.on_pick_up)
        self.event_bus.subscribe(EVENT_POINTER_MOVE, self.on_pointer_move)
        self.event_bus.subscribe(EVENT_DRAG_DROP, self.on_drop)
        self.event_bus.subscribe(EVENT_DRAG_CANCEL, self.on_cancel)
        self.event_bus.subscribe(EVENT_SQUARE_REMOVE_REQUEST, self.on_remove_request)
        self.event_bus.subscribe(EVENT_SQUARE_LOCK_TOGGLE, self.on_lock_toggle)
        self.event_bus.subscribe(EVENT_BOARD_RESET_REQUEST, self.on_reset_request)

    @property
    def state(self) -> PuzzleState:
        return get_puzzle(self.world).state

    @property
    def board(self) -> BoardState:
        return self.state.board

    @property
    def preview(self) -> Optional[DragPreview]:
        return self.state.preview

    def dispatch(self, event: PuzzleEvent) -> Step:
        """Apply one event, store the new state, then publish its notices."""
        puzzle = get_puzzle(self.world)
        step = reduce(puzzle.state, event)
        puzzle.state = step.state
        for notice in step.notices:
            self.event_bus.emit(notice.name, **notice.payload)
        return step

    def on_pick_up(self, sender, **kwargs):
        size = self._coerce_int(kwargs.get('size'))
        if size is None:
            return
        square_id = kwargs.get('square_id')
        self.dispatch(PickUp(size=size, square_id=square_id if isinstance(square_id, str) else None))

    def on_pointer_move(self, sender, **kwargs):
        point = self._coerce_point(kwargs)
        if point is None:
            return
        self.dispatch(PointerMove(*point))

    def on_drop(self, sender, **kwargs):
        point = self._coerce_point(kwargs)
        if point is None:
            return
        self.dispatch(Drop(*point))

    def on_cancel(self, sender, **kwargs):
        reason = kwargs.get('reason') or 'cancelled'
        self.dispatch(CancelDrag(reason=str(reason)))

    def on_remove_request(self, sender, **kwargs):
        square_id = kwargs.get('square_id')
        if not isinstance(square_id, str) or not square_id:
            return
        self.dispatch(RequestRemove(square_id=square_id))

    def on_lock_toggle(self, sender, **kwargs):
        square_id = kwargs.get('square_id')
        if not isinstance(square_id, str) or not square_id:
            return
        self.dispatch(ToggleLock(square_id=square_id))

    def on_reset_request(self, sender, **kwargs):
        self.dispatch(ResetBoard())

    @staticmethod
    def _coerce_int(value) -> int | None:
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return None

    @staticmethod
    def _coerce_point(payload) -> tuple[float, float] | None:
        try:
            x, y = float(payload['x']), float(payload['y'])
        except (KeyError, TypeError, ValueError):
            return None
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        return x, y

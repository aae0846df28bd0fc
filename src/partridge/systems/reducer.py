"""Pure state transitions for the puzzle: ``reduce(state, event) -> Step``.

The drag state machine is Idle -> Dragging -> Idle (cancel) or
Dragging -> Committing -> Idle (drop). Idle is represented by
``PuzzleState.drag is None``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple, Union

from partridge.components.board_state import BoardState
from partridge.components.drag_session import (
    DragInProgressError,
    DragPhase,
    DragPreview,
    DragSession,
    DragSource,
)
from partridge.components.placed_square import PlacedSquare
from partridge.constants import CELL_SIZE
from partridge.events.bus import (
    EVENT_ACTION_REJECTED,
    EVENT_BOARD_RESET,
    EVENT_DRAG_ENDED,
    EVENT_DRAG_PREVIEW_CHANGED,
    EVENT_DRAG_STARTED,
    EVENT_PUZZLE_COMPLETED,
    EVENT_SQUARE_LOCK_CHANGED,
    EVENT_SQUARE_PLACED,
    EVENT_SQUARE_REMOVED,
    EVENT_SQUARE_REPOSITIONED,
)
from partridge.systems.placement import validate_pointer
from partridge.utils.outcome import Rejection

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Input events
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PickUp:
    size: int
    square_id: Optional[str] = None  # None: new square from the inventory


@dataclass(frozen=True, slots=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Drop:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class CancelDrag:
    reason: str = "cancelled"


@dataclass(frozen=True, slots=True)
class RequestRemove:
    square_id: str


@dataclass(frozen=True, slots=True)
class ToggleLock:
    square_id: str


@dataclass(frozen=True, slots=True)
class ResetBoard:
    pass


PuzzleEvent = Union[PickUp, PointerMove, Drop, CancelDrag, RequestRemove, ToggleLock, ResetBoard]


# ---------------------------------------------------------------------------
# State and results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PuzzleState:
    """Board plus the optional active drag.

    cell_size: pixels per grid cell in the coordinate space of pointer events.
    """
    board: BoardState = field(default_factory=BoardState)
    drag: Optional[DragSession] = None
    cell_size: float = CELL_SIZE

    @property
    def phase(self) -> DragPhase:
        return self.drag.phase if self.drag is not None else DragPhase.IDLE

    @property
    def preview(self) -> Optional[DragPreview]:
        return self.drag.preview if self.drag is not None else None


@dataclass(frozen=True, slots=True)
class Notice:
    """An output event to publish after a transition."""
    name: str
    payload: Dict[str, Any]


@dataclass(frozen=True, slots=True)
class Step:
    state: PuzzleState
    rejection: Optional[Rejection] = None
    notices: Tuple[Notice, ...] = ()

    @property
    def ok(self) -> bool:
        return self.rejection is None


def _rejected(state: PuzzleState, action: str, reason: Rejection, *, size=None, square_id=None, extra=()) -> Step:
    notice = Notice(EVENT_ACTION_REJECTED, {
        "action": action,
        "reason": reason,
        "size": size,
        "square_id": square_id,
    })
    return Step(state=state, rejection=reason, notices=tuple(extra) + (notice,))


def _square_payload(board: BoardState, square: PlacedSquare) -> Dict[str, Any]:
    return {
        "square_id": square.id,
        "size": square.size,
        "x": square.x,
        "y": square.y,
        "remaining": board.remaining(square.size),
        "total_squares": len(board.squares),
    }


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def pick_up(state: PuzzleState, event: PickUp) -> Step:
    if state.drag is not None:
        raise DragInProgressError(
            f"pick-up of size {event.size} while dragging {state.drag.square_id}"
        )
    board = state.board
    if event.square_id is None:
        if board.remaining(event.size) <= 0:
            log.debug("No squares of size %d left to pick up", event.size)
            return _rejected(state, "pick_up", Rejection.INVENTORY_EXHAUSTED, size=event.size)
        square_id, board = board.reserve_id(event.size)
        session = DragSession(source=DragSource.TOOLBAR, size=event.size, square_id=square_id)
    else:
        square = board.find(event.square_id)
        if square is None:
            return _rejected(state, "pick_up", Rejection.NOT_FOUND, square_id=event.square_id)
        if square.locked:
            log.debug("Square %s is locked", square.id)
            return _rejected(state, "pick_up", Rejection.SQUARE_LOCKED, size=square.size, square_id=square.id)
        session = DragSession(source=DragSource.BOARD, size=square.size, square_id=square.id)
    notice = Notice(EVENT_DRAG_STARTED, {
        "size": session.size,
        "square_id": session.square_id,
        "source": session.source.value,
    })
    return Step(state=replace(state, board=board, drag=session), notices=(notice,))


def preview_for(state: PuzzleState, session: DragSession, x: float, y: float) -> DragPreview:
    placement = validate_pointer(
        x,
        y,
        session.size,
        state.cell_size,
        state.board.grid_size,
        state.board.squares,
        exclude_id=session.square_id if session.is_reposition else None,
    )
    return DragPreview(x=placement.x, y=placement.y, size=session.size, valid=placement.valid)


def pointer_move(state: PuzzleState, event: PointerMove) -> Step:
    session = state.drag
    if session is None:
        return Step(state=state)
    preview = preview_for(state, session, event.x, event.y)
    if preview == session.preview:
        return Step(state=state)
    notice = Notice(EVENT_DRAG_PREVIEW_CHANGED, {"preview": preview})
    return Step(state=replace(state, drag=session.with_preview(preview)), notices=(notice,))


def drop(state: PuzzleState, event: Drop) -> Step:
    session = state.drag
    if session is None:
        return Step(state=state)
    return commit(replace(state, drag=session.committing()), event.x, event.y)


def commit(state: PuzzleState, x: float, y: float) -> Step:
    """Re-validate at the final pointer position and apply, leaving no active drag."""
    session = state.drag
    if session is None or session.phase != DragPhase.COMMITTING:
        raise RuntimeError("commit requires a drag in the committing phase")
    idle = replace(state, drag=None)
    cleared = Notice(EVENT_DRAG_PREVIEW_CHANGED, {"preview": None})
    # Fresh validation: the board may have changed since the last preview.
    target = preview_for(state, session, x, y)
    board = state.board
    if session.is_reposition:
        outcome = board.move(session.square_id, target.x, target.y)
        action, placed_event = "reposition", EVENT_SQUARE_REPOSITIONED
    else:
        outcome = board.place(session.size, target.x, target.y, square_id=session.square_id)
        action, placed_event = "place", EVENT_SQUARE_PLACED
    if not outcome.ok:
        log.debug(
            "Square %s (size %d) rejected at (%d,%d): %s",
            session.square_id, session.size, target.x, target.y, outcome.rejection.value,
        )
        ended = Notice(EVENT_DRAG_ENDED, {"reason": "rejected"})
        return _rejected(
            idle, action, outcome.rejection,
            size=session.size, square_id=session.square_id, extra=(cleared, ended),
        )
    board = outcome.value
    notices = [
        cleared,
        Notice(placed_event, _square_payload(board, outcome.square)),
    ]
    if placed_event == EVENT_SQUARE_PLACED and board.is_complete():
        notices.append(Notice(EVENT_PUZZLE_COMPLETED, {"total_squares": len(board.squares)}))
    notices.append(Notice(EVENT_DRAG_ENDED, {"reason": "dropped"}))
    return Step(state=replace(idle, board=board), notices=tuple(notices))


def cancel_drag(state: PuzzleState, event: CancelDrag) -> Step:
    if state.drag is None:
        return Step(state=state)
    return Step(
        state=replace(state, drag=None),
        notices=(
            Notice(EVENT_DRAG_PREVIEW_CHANGED, {"preview": None}),
            Notice(EVENT_DRAG_ENDED, {"reason": event.reason}),
        ),
    )


def request_remove(state: PuzzleState, event: RequestRemove) -> Step:
    outcome = state.board.remove(event.square_id)
    if not outcome.ok:
        size = outcome.square.size if outcome.square is not None else None
        return _rejected(state, "remove", outcome.rejection, size=size, square_id=event.square_id)
    board = outcome.value
    square = outcome.square
    notice = Notice(EVENT_SQUARE_REMOVED, {
        "square_id": square.id,
        "size": square.size,
        "remaining": board.remaining(square.size),
        "total_squares": len(board.squares),
    })
    return Step(state=replace(state, board=board), notices=(notice,))


def toggle_lock(state: PuzzleState, event: ToggleLock) -> Step:
    outcome = state.board.toggle_lock(event.square_id)
    if not outcome.ok:
        return _rejected(state, "toggle_lock", outcome.rejection, square_id=event.square_id)
    square = outcome.square
    notice = Notice(EVENT_SQUARE_LOCK_CHANGED, {
        "square_id": square.id,
        "size": square.size,
        "locked": square.locked,
    })
    return Step(state=replace(state, board=outcome.value), notices=(notice,))


def reset_board(state: PuzzleState, event: ResetBoard) -> Step:
    notices = []
    if state.drag is not None:
        notices.append(Notice(EVENT_DRAG_PREVIEW_CHANGED, {"preview": None}))
        notices.append(Notice(EVENT_DRAG_ENDED, {"reason": "reset"}))
    notices.append(Notice(EVENT_BOARD_RESET, {
        "squares_placed": len(state.board.squares),
        "total_squares": 0,
    }))
    return Step(state=replace(state, board=state.board.reset(), drag=None), notices=tuple(notices))


_HANDLERS = {
    PickUp: pick_up,
    PointerMove: pointer_move,
    Drop: drop,
    CancelDrag: cancel_drag,
    RequestRemove: request_remove,
    ToggleLock: toggle_lock,
    ResetBoard: reset_board,
}


def reduce(state: PuzzleState, event: PuzzleEvent) -> Step:
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"unsupported puzzle event: {event!r}")
    return handler(state, event)

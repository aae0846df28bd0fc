import pytest

from partridge.components.board_state import BoardState
from partridge.components.drag_session import DragInProgressError, DragPhase, DragSource
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
from partridge.components.inventory import InventoryTracker
from partridge.systems.reducer import (
    CancelDrag,
    Drop,
    PickUp,
    PointerMove,
    PuzzleState,
    RequestRemove,
    ResetBoard,
    ToggleLock,
    commit,
    reduce,
)
from partridge.utils.outcome import Rejection
from tests.helpers import place_square, pointer_for_cell


def _names(step):
    return [notice.name for notice in step.notices]


def test_toolbar_drag_places_square():
    state = PuzzleState()
    step = reduce(state, PickUp(size=3))
    assert step.ok
    assert step.state.phase == DragPhase.DRAGGING
    assert step.state.drag.source == DragSource.TOOLBAR
    assert _names(step) == [EVENT_DRAG_STARTED]
    square_id = step.state.drag.square_id

    step = reduce(step.state, PointerMove(*pointer_for_cell(2, 2, 3)))
    preview = step.state.preview
    assert (preview.x, preview.y, preview.valid) == (2, 2, True)
    assert _names(step) == [EVENT_DRAG_PREVIEW_CHANGED]

    step = reduce(step.state, Drop(*pointer_for_cell(2, 2, 3)))
    assert step.ok
    assert step.state.drag is None
    assert step.state.phase == DragPhase.IDLE
    placed = step.state.board.find(square_id)
    assert (placed.x, placed.y, placed.size) == (2, 2, 3)
    assert step.state.board.remaining(3) == 2
    assert _names(step) == [EVENT_DRAG_PREVIEW_CHANGED, EVENT_SQUARE_PLACED, EVENT_DRAG_ENDED]
    assert step.notices[-1].payload["reason"] == "dropped"


def test_repeated_pointer_move_to_same_cell_is_quiet():
    state = reduce(PuzzleState(), PickUp(size=2)).state
    first = reduce(state, PointerMove(*pointer_for_cell(4, 4, 2)))
    again = reduce(first.state, PointerMove(*pointer_for_cell(4, 4, 2)))
    assert again.notices == ()
    assert again.state is first.state


def test_preview_matches_committed_position_and_drop_rejects_overlap():
    board = place_square(BoardState(), 1, 44, 44)
    state = reduce(PuzzleState(board=board), PickUp(size=2)).state
    point = pointer_for_cell(44, 44, 2)
    step = reduce(state, PointerMove(*point))
    preview = step.state.preview
    assert (preview.x, preview.y, preview.valid) == (43, 43, False)

    step = reduce(step.state, Drop(*point))
    assert step.rejection == Rejection.INVALID_PLACEMENT
    assert step.state.drag is None
    assert step.state.board.squares == board.squares
    assert step.state.board.remaining(2) == 2
    assert EVENT_ACTION_REJECTED in _names(step)
    assert step.notices[-1].name == EVENT_ACTION_REJECTED
    ended = [n for n in step.notices if n.name == EVENT_DRAG_ENDED]
    assert ended[0].payload["reason"] == "rejected"


def test_reposition_drag_moves_existing_square():
    board = place_square(BoardState(), 4, 0, 0)
    square_id = board.squares[0].id
    state = reduce(PuzzleState(board=board), PickUp(size=4, square_id=square_id)).state
    assert state.drag.source == DragSource.BOARD
    assert state.drag.square_id == square_id

    # Overlapping its own old footprint is fine.
    step = reduce(state, Drop(*pointer_for_cell(1, 1, 4)))
    assert step.ok
    moved = step.state.board.find(square_id)
    assert (moved.x, moved.y) == (1, 1)
    assert step.state.board.remaining(4) == 3
    assert EVENT_SQUARE_REPOSITIONED in _names(step)


def test_pick_up_rejections():
    board = place_square(BoardState(), 1, 0, 0)
    state = PuzzleState(board=board)
    exhausted = reduce(state, PickUp(size=1))
    assert exhausted.rejection == Rejection.INVENTORY_EXHAUSTED
    assert exhausted.state.drag is None

    missing = reduce(state, PickUp(size=1, square_id="square-1-42"))
    assert missing.rejection == Rejection.NOT_FOUND

    locked_board = board.toggle_lock(board.squares[0].id).value
    locked = reduce(PuzzleState(board=locked_board), PickUp(size=1, square_id=board.squares[0].id))
    assert locked.rejection == Rejection.SQUARE_LOCKED
    assert locked.state.drag is None


def test_second_pick_up_while_dragging_raises():
    state = reduce(PuzzleState(), PickUp(size=5)).state
    with pytest.raises(DragInProgressError):
        reduce(state, PickUp(size=6))


def test_cancel_leaves_board_and_inventory_untouched():
    start = PuzzleState()
    state = reduce(start, PickUp(size=7)).state
    state = reduce(state, PointerMove(100, 100)).state
    step = reduce(state, CancelDrag(reason="escape"))
    assert step.state.drag is None
    assert step.state.board.squares == ()
    assert step.state.board.inventory == start.board.inventory
    assert step.notices[-1].payload == {"reason": "escape"}


def test_idle_pointer_events_are_ignored():
    state = PuzzleState()
    for event in (PointerMove(10, 10), Drop(10, 10), CancelDrag()):
        step = reduce(state, event)
        assert step.state is state
        assert step.ok
        assert step.notices == ()


def test_commit_requires_committing_phase():
    state = reduce(PuzzleState(), PickUp(size=1)).state
    with pytest.raises(RuntimeError):
        commit(state, 0, 0)


def test_remove_and_lock_events():
    board = place_square(BoardState(), 3, 0, 0)
    square_id = board.squares[0].id
    state = PuzzleState(board=board)

    step = reduce(state, ToggleLock(square_id))
    assert _names(step) == [EVENT_SQUARE_LOCK_CHANGED]
    assert step.notices[0].payload["locked"] is True

    blocked = reduce(step.state, RequestRemove(square_id))
    assert blocked.rejection == Rejection.SQUARE_LOCKED
    assert blocked.notices[0].payload["size"] == 3

    unlocked = reduce(step.state, ToggleLock(square_id)).state
    removed = reduce(unlocked, RequestRemove(square_id))
    assert removed.ok
    assert _names(removed) == [EVENT_SQUARE_REMOVED]
    assert removed.notices[0].payload["remaining"] == 3
    assert removed.state.board.squares == ()

    assert reduce(state, ToggleLock("square-9-99")).rejection == Rejection.NOT_FOUND


def test_reset_discards_active_drag():
    board = place_square(BoardState(), 2, 0, 0)
    state = reduce(PuzzleState(board=board), PickUp(size=9)).state
    step = reduce(state, ResetBoard())
    assert step.state.drag is None
    assert step.state.board.squares == ()
    assert step.state.board.remaining(2) == 2
    names = _names(step)
    assert names[-1] == EVENT_BOARD_RESET
    assert EVENT_DRAG_ENDED in names
    assert step.notices[-1].payload["squares_placed"] == 1


def test_final_placement_completes_puzzle():
    board = BoardState(grid_size=5, inventory=InventoryTracker.initialize((1, 2)))
    board = place_square(board, 2, 0, 0)
    board = place_square(board, 2, 2, 0)
    state = reduce(PuzzleState(board=board), PickUp(size=1)).state
    step = reduce(state, Drop(*pointer_for_cell(4, 4, 1)))
    assert step.ok
    assert step.state.board.is_complete()
    assert EVENT_PUZZLE_COMPLETED in _names(step)
    assert step.notices[-1].name == EVENT_DRAG_ENDED


def test_unknown_event_type_raises():
    with pytest.raises(TypeError):
        reduce(PuzzleState(), object())

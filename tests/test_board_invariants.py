import random

import pytest

from partridge.systems.placement import rects_overlap
from partridge.systems.reducer import (
    CancelDrag,
    Drop,
    PickUp,
    PointerMove,
    PuzzleState,
    RequestRemove,
    ResetBoard,
    ToggleLock,
    reduce,
)


def _assert_invariants(state: PuzzleState) -> None:
    board = state.board
    grid = board.grid_size
    squares = board.squares
    for square in squares:
        assert 0 <= square.x and square.x + square.size <= grid
        assert 0 <= square.y and square.y + square.size <= grid
    for i, a in enumerate(squares):
        for b in squares[i + 1:]:
            assert not rects_overlap(a.x, a.y, a.size, b.x, b.y, b.size), (a, b)
    for size in board.inventory.sizes():
        assert board.remaining(size) + board.placed_count(size) == board.inventory.total(size)
    ids = [square.id for square in squares]
    assert len(ids) == len(set(ids))


def _random_event(rng: random.Random, state: PuzzleState):
    board_px = state.board.grid_size * state.cell_size
    point = (rng.uniform(-100, board_px + 100), rng.uniform(-100, board_px + 100))
    if state.drag is not None:
        choice = rng.random()
        if choice < 0.5:
            return PointerMove(*point)
        if choice < 0.9:
            return Drop(*point)
        if choice < 0.97:
            return CancelDrag()
        return ResetBoard()
    squares = state.board.squares
    choice = rng.random()
    if choice < 0.55 or not squares:
        return PickUp(size=rng.randint(1, 9))
    square = rng.choice(squares)
    if choice < 0.75:
        return PickUp(size=square.size, square_id=square.id)
    if choice < 0.88:
        return RequestRemove(square.id)
    if choice < 0.99:
        return ToggleLock(square.id)
    return ResetBoard()


@pytest.mark.parametrize("seed", [1, 7, 2024, 45])
def test_random_operation_sequences_keep_board_consistent(seed):
    rng = random.Random(seed)
    state = PuzzleState()
    for _ in range(600):
        event = _random_event(rng, state)
        before = state
        step = reduce(state, event)
        state = step.state
        if not step.ok:
            # A rejected command leaves squares and stock as they were.
            assert state.board.squares == before.board.squares
            assert state.board.inventory == before.board.inventory
        _assert_invariants(state)

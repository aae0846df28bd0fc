from dataclasses import dataclass

from partridge.systems.reducer import PuzzleState

@dataclass(slots=True)
class Puzzle:
    """Singleton component holding the current immutable PuzzleState.

    Systems replace ``state`` wholesale after each reducer step.
    """
    state: PuzzleState

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional


class DragSource(Enum):
    """Where the dragged square came from."""
    TOOLBAR = "toolbar"
    BOARD = "board"


class DragPhase(Enum):
    IDLE = auto()
    DRAGGING = auto()
    COMMITTING = auto()


@dataclass(frozen=True, slots=True)
class DragPreview:
    """Live, uncommitted placement candidate shown while dragging."""
    x: int
    y: int
    size: int
    valid: bool


@dataclass(frozen=True, slots=True)
class DragSession:
    """Transient state of the single active drag gesture.

    Fields:
      source: toolbar (new square) or board (existing square).
      size: side length of the dragged square.
      square_id: freshly reserved id for toolbar drags, the existing id otherwise.
      phase: DRAGGING until a drop starts committing.
      preview: last computed candidate, or None before the first pointer move.
    """
    source: DragSource
    size: int
    square_id: str
    phase: DragPhase = DragPhase.DRAGGING
    preview: Optional[DragPreview] = None

    @property
    def is_reposition(self) -> bool:
        return self.source == DragSource.BOARD

    def with_preview(self, preview: Optional[DragPreview]) -> "DragSession":
        return replace(self, preview=preview)

    def committing(self) -> "DragSession":
        return replace(self, phase=DragPhase.COMMITTING)


class DragInProgressError(RuntimeError):
    """A second pick-up arrived while a drag was already active."""

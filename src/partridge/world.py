import logging

from esper import World

from partridge.events.bus import EventBus
from partridge.components.board_config import BoardConfig
from partridge.components.board_state import BoardState
from partridge.components.inventory import InventoryTracker
from partridge.components.puzzle import Puzzle
from partridge.systems.reducer import PuzzleState

log = logging.getLogger(__name__)


def create_world(event_bus: EventBus, *, config: BoardConfig | None = None) -> World:
    """Build a world with the board configuration and an empty puzzle.

    event_bus is accepted for symmetry with the systems that will be attached
    to the returned world; nothing is emitted during creation.
    """
    world = World()
    config = config or BoardConfig()
    if not config.is_exact_tiling():
        log.warning(
            "Squares cover %d cells on a %d-cell board; completion will not mean a full tiling",
            config.tiling_area(),
            config.board_area,
        )
    board = BoardState(
        grid_size=config.grid_size,
        inventory=InventoryTracker.initialize(config.sizes),
    )
    world.create_entity(
        config,
        Puzzle(state=PuzzleState(board=board, cell_size=config.cell_size)),
    )
    return world


def get_config(world: World) -> BoardConfig:
    for _, config in world.get_component(BoardConfig):
        return config
    raise RuntimeError("BoardConfig not found")


def get_puzzle(world: World) -> Puzzle:
    for _, puzzle in world.get_component(Puzzle):
        return puzzle
    raise RuntimeError("Puzzle state not found")

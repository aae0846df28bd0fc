import pytest

from partridge.components.board_config import BoardConfig
from partridge.events.bus import EventBus
from partridge.world import create_world


def test_reference_board_is_an_exact_tiling():
    config = BoardConfig()
    assert config.grid_size == 45
    assert config.board_area == 2025
    assert config.tiling_area() == 2025
    assert config.is_exact_tiling()


def test_small_board_is_not_exact():
    config = BoardConfig(grid_size=5, sizes=(1, 2))
    assert config.tiling_area() == 9
    assert not config.is_exact_tiling()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"grid_size": 0},
        {"cell_size": -1},
        {"sizes": ()},
        {"grid_size": 5, "sizes": (1, 6)},
        {"sizes": (0, 1)},
    ],
)
def test_invalid_config_raises(kwargs):
    with pytest.raises(ValueError):
        BoardConfig(**kwargs)


def test_world_warns_when_inventory_cannot_tile_board(caplog):
    with caplog.at_level("WARNING", logger="partridge.world"):
        create_world(EventBus(), config=BoardConfig(grid_size=5, sizes=(1, 2)))
    assert "9 cells on a 25-cell board" in caplog.text

    caplog.clear()
    with caplog.at_level("WARNING", logger="partridge.world"):
        create_world(EventBus())
    assert caplog.text == ""

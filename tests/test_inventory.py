from partridge.components.inventory import InventoryTracker
from partridge.utils.outcome import Rejection


def test_initialize_grants_n_squares_of_size_n():
    inventory = InventoryTracker.initialize()
    assert inventory.sizes() == tuple(range(1, 10))
    for size in range(1, 10):
        assert inventory.total(size) == size
        assert inventory.remaining(size) == size
    assert not inventory.is_exhausted()


def test_decrement_and_increment_are_pure():
    inventory = InventoryTracker.initialize()
    taken = inventory.decrement(3)
    assert taken.ok
    assert taken.value.remaining(3) == 2
    assert inventory.remaining(3) == 3  # original untouched
    returned = taken.value.increment(3)
    assert returned.ok
    assert returned.value.remaining(3) == 3


def test_decrement_rejects_when_empty():
    inventory = InventoryTracker.initialize()
    taken = inventory.decrement(1)
    assert taken.ok
    again = taken.value.decrement(1)
    assert again.rejection == Rejection.INVENTORY_EXHAUSTED
    assert again.value is taken.value
    assert again.value.remaining(1) == 0
    assert again.value.count_for(1).exhausted


def test_increment_rejects_at_total():
    inventory = InventoryTracker.initialize()
    overflow = inventory.increment(5)
    assert overflow.rejection == Rejection.INVENTORY_OVERFLOW
    assert overflow.value is inventory


def test_unknown_size_is_rejected():
    inventory = InventoryTracker.initialize()
    assert inventory.decrement(10).rejection == Rejection.INVENTORY_EXHAUSTED
    assert inventory.increment(0).rejection == Rejection.INVENTORY_OVERFLOW
    assert inventory.remaining(10) == 0
    assert inventory.count_for(10) is None


def test_reset_restores_every_size():
    inventory = InventoryTracker.initialize()
    for size in (2, 2, 7, 9):
        inventory = inventory.decrement(size).value
    assert inventory.remaining(2) == 0
    restored = inventory.reset()
    assert restored == InventoryTracker.initialize()


def test_exhausted_when_everything_taken():
    inventory = InventoryTracker.initialize((1, 2))
    for size in (1, 2, 2):
        inventory = inventory.decrement(size).value
    assert inventory.is_exhausted()
    assert inventory.count_for(2).remaining == 0

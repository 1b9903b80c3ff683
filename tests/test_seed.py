from tool_rental.services.seed import TOOL_SEEDS, WORKER_SEEDS, seed_demo_data
from tool_rental.services.store import RentalStore


def test_demo_data_respects_store_invariants(store):
    seed_demo_data(store)

    assert len(store.tools) == len(TOOL_SEEDS)
    assert len(store.workers) == len(WORKER_SEEDS)
    assert store.rentals
    for tool in store.tools:
        assert 0 <= tool.available_quantity <= tool.total_quantity
    for customer in store.customers:
        assert 0 <= customer.active_rentals <= customer.total_rentals
    open_units = sum(rental.quantity for rental in store.rentals if rental.is_open)
    assert open_units == store.stats.rented_tools


def test_demo_data_is_repeatable(store):
    other = RentalStore(today=store.today)
    seed_demo_data(store, seed=7)
    seed_demo_data(other, seed=7)
    assert [r.quantity for r in store.rentals] == [r.quantity for r in other.rentals]
    assert store.attendance == other.attendance

from datetime import date, timedelta

import pytest

from tool_rental.domain.models import (
    AttendanceStatus,
    Customer,
    Rental,
    RentalStatus,
    Tool,
    Worker,
)
from tool_rental.services.results import ResultKind
from tool_rental.services.store import RentalStore

from conftest import NOW, TODAY


def _rent(store, quantity=10, start=TODAY, days=7, tool_id="t1", customer_id="c1"):
    return store.add_rental(
        {
            "tool_id": tool_id,
            "customer_id": customer_id,
            "quantity": quantity,
            "start_date": start,
            "expected_return_date": start + timedelta(days=days),
        }
    )


def _assert_counters_hold(store):
    for tool in store.tools:
        assert 0 <= tool.available_quantity <= tool.total_quantity
    for customer in store.customers:
        assert 0 <= customer.active_rentals <= customer.total_rentals


# --------------------------------------------------------------------
# RENTAL LIFECYCLE
# --------------------------------------------------------------------
def test_rent_then_return_restores_counters(stocked_store):
    created = _rent(stocked_store)
    assert created.ok
    assert created.value.status == RentalStatus.ACTIVE
    assert stocked_store.get_tool("t1").available_quantity == 20
    customer = stocked_store.get_customer("c1")
    assert (customer.total_rentals, customer.active_rentals) == (1, 1)

    returned = stocked_store.mark_rental_as_returned(created.value.id)
    assert returned.ok
    assert stocked_store.get_tool("t1").available_quantity == 30
    customer = stocked_store.get_customer("c1")
    assert (customer.total_rentals, customer.active_rentals) == (1, 0)
    rental = stocked_store.get_rental(created.value.id)
    assert rental.status == RentalStatus.RETURNED
    assert rental.actual_return_date == NOW


def test_rental_snapshots_tool_rate_and_names(stocked_store):
    rental = _rent(stocked_store, quantity=2).value
    assert rental.rate_per_day == 15
    assert rental.tool_name == "Concrete Mixer"
    assert rental.customer_name == "Ramesh Builders"

    tool = stocked_store.get_tool("t1")
    stocked_store.update_tool(
        Tool(tool.id, "Mixer XL", tool.category, tool.total_quantity, 0, 99.0)
    )
    kept = stocked_store.get_rental(rental.id)
    assert kept.rate_per_day == 15
    assert kept.tool_name == "Concrete Mixer"


def test_rental_above_availability_is_refused(stocked_store):
    result = _rent(stocked_store, quantity=31)
    assert result.kind == ResultKind.INVARIANT_VIOLATION
    assert result.message == "Only 30 units of Concrete Mixer are available."
    assert stocked_store.rentals == ()
    assert stocked_store.get_tool("t1").available_quantity == 30
    assert stocked_store.get_customer("c1").total_rentals == 0


@pytest.mark.parametrize("quantity", [0, -3])
def test_rental_with_non_positive_quantity_is_refused(stocked_store, quantity):
    result = _rent(stocked_store, quantity=quantity)
    assert result.kind == ResultKind.INVARIANT_VIOLATION
    assert stocked_store.rentals == ()


def test_rental_returning_before_start_is_refused(stocked_store):
    result = _rent(stocked_store, days=-1)
    assert result.kind == ResultKind.INVARIANT_VIOLATION
    assert stocked_store.get_tool("t1").available_quantity == 30


@pytest.mark.parametrize("rate", [0, -15])
def test_rental_with_non_positive_rate_is_refused(stocked_store, rate):
    result = stocked_store.add_rental(
        {
            "tool_id": "t1",
            "customer_id": "c1",
            "quantity": 1,
            "start_date": TODAY,
            "expected_return_date": TODAY + timedelta(days=3),
            "rate_per_day": rate,
        }
    )
    assert result.kind == ResultKind.INVARIANT_VIOLATION
    assert result.message == "Rate per day must be greater than zero."
    assert stocked_store.rentals == ()
    assert stocked_store.stats.monthly_revenue == 0


def test_rental_with_explicit_rate_overrides_tool_rate(stocked_store):
    result = stocked_store.add_rental(
        {
            "tool_id": "t1",
            "customer_id": "c1",
            "quantity": 2,
            "start_date": TODAY,
            "expected_return_date": TODAY + timedelta(days=3),
            "rate_per_day": "20",
        }
    )
    assert result.value.rate_per_day == 20.0
    assert stocked_store.stats.monthly_revenue == 40.0


def test_rental_for_unknown_tool_or_customer_is_not_found(stocked_store):
    assert _rent(stocked_store, tool_id="t99").kind == ResultKind.NOT_FOUND
    result = _rent(stocked_store, customer_id="c99")
    assert result.kind == ResultKind.NOT_FOUND
    assert result.message == "Customer c99 was not found."
    assert stocked_store.get_tool("t1").available_quantity == 30


def test_returning_twice_is_refused(stocked_store):
    rental_id = _rent(stocked_store).value.id
    stocked_store.mark_rental_as_returned(rental_id)
    again = stocked_store.mark_rental_as_returned(rental_id)
    assert again.kind == ResultKind.INVARIANT_VIOLATION
    assert stocked_store.get_tool("t1").available_quantity == 30
    assert stocked_store.get_customer("c1").active_rentals == 0


def test_cancel_releases_units_and_keeps_history(stocked_store):
    rental_id = _rent(stocked_store, quantity=5).value.id
    result = stocked_store.cancel_rental(rental_id)
    assert result.ok
    assert result.value.status == RentalStatus.CANCELLED
    assert stocked_store.get_tool("t1").available_quantity == 30
    customer = stocked_store.get_customer("c1")
    assert (customer.total_rentals, customer.active_rentals) == (1, 0)
    assert stocked_store.cancel_rental(rental_id).kind == ResultKind.INVARIANT_VIOLATION


def test_deleting_open_rental_restores_counters(stocked_store):
    rental_id = _rent(stocked_store).value.id
    result = stocked_store.delete_rental(rental_id)
    assert result.ok
    assert stocked_store.rentals == ()
    assert stocked_store.get_tool("t1").available_quantity == 30
    assert stocked_store.get_customer("c1").active_rentals == 0


def test_deleting_returned_rental_leaves_counters(stocked_store):
    rental_id = _rent(stocked_store).value.id
    stocked_store.mark_rental_as_returned(rental_id)
    stocked_store.delete_rental(rental_id)
    assert stocked_store.get_tool("t1").available_quantity == 30
    assert stocked_store.get_customer("c1").total_rentals == 1


def test_update_rental_cannot_change_quantity(stocked_store):
    rental = _rent(stocked_store).value
    result = stocked_store.update_rental(
        Rental(**{**_fields(rental), "quantity": 1})
    )
    assert result.kind == ResultKind.INVARIANT_VIOLATION
    assert stocked_store.get_rental(rental.id).quantity == 10


def test_update_rental_changes_dates(stocked_store):
    rental = _rent(stocked_store).value
    new_return = TODAY + timedelta(days=30)
    result = stocked_store.update_rental(
        Rental(**{**_fields(rental), "expected_return_date": new_return})
    )
    assert result.ok
    assert stocked_store.get_rental(rental.id).expected_return_date == new_return


def _fields(rental):
    return {name: getattr(rental, name) for name in Rental.__dataclass_fields__}


# --------------------------------------------------------------------
# TOOLS AND CUSTOMERS
# --------------------------------------------------------------------
def test_add_tool_defaults_available_to_total(store):
    result = store.add_tool(
        {"name": "Drill", "category": "Power Tools", "total_quantity": 4, "rate_per_day": 100}
    )
    assert result.ok
    assert result.value.id == "t1"
    assert result.value.available_quantity == 4
    assert result.message == "Drill has been added to inventory."


def test_add_tool_with_available_above_total_is_refused(store):
    result = store.add_tool(
        {
            "name": "Drill",
            "category": "Power Tools",
            "total_quantity": 4,
            "available_quantity": 5,
            "rate_per_day": 100,
        }
    )
    assert result.kind == ResultKind.INVARIANT_VIOLATION
    assert store.tools == ()


def test_update_tool_keeps_rented_units(stocked_store):
    _rent(stocked_store, quantity=10)
    tool = stocked_store.get_tool("t1")
    result = stocked_store.update_tool(
        Tool(tool.id, tool.name, tool.category, 60, 60, tool.rate_per_day)
    )
    assert result.ok
    updated = stocked_store.get_tool("t1")
    assert updated.total_quantity == 60
    assert updated.rented_quantity == 30


def test_update_tool_below_rented_units_is_refused(stocked_store):
    _rent(stocked_store, quantity=10)
    tool = stocked_store.get_tool("t1")
    result = stocked_store.update_tool(
        Tool(tool.id, tool.name, tool.category, 5, 5, tool.rate_per_day)
    )
    assert result.kind == ResultKind.INVARIANT_VIOLATION
    assert stocked_store.get_tool("t1").total_quantity == 50


def test_delete_tool_with_open_rental_is_refused(stocked_store):
    rental_id = _rent(stocked_store).value.id
    assert stocked_store.delete_tool("t1").kind == ResultKind.INVARIANT_VIOLATION
    stocked_store.mark_rental_as_returned(rental_id)
    assert stocked_store.delete_tool("t1").ok
    assert stocked_store.tools == ()


def test_delete_customer_with_active_rentals_is_refused(stocked_store):
    rental_id = _rent(stocked_store).value.id
    result = stocked_store.delete_customer("c1")
    assert result.kind == ResultKind.INVARIANT_VIOLATION
    assert result.message == "Ramesh Builders has active rentals. Return all tools first."
    assert len(stocked_store.customers) == 1

    stocked_store.mark_rental_as_returned(rental_id)
    assert stocked_store.delete_customer("c1").ok
    assert stocked_store.customers == ()


def test_update_customer_keeps_store_owned_counters(stocked_store):
    _rent(stocked_store)
    result = stocked_store.update_customer(
        Customer("c1", "Ramesh & Sons", "9876543210", "14 MG Road", 0, 0)
    )
    assert result.ok
    customer = stocked_store.get_customer("c1")
    assert customer.name == "Ramesh & Sons"
    assert (customer.total_rentals, customer.active_rentals) == (1, 1)


@pytest.mark.parametrize(
    "operation",
    ["delete_tool", "delete_rental", "mark_rental_as_returned", "cancel_rental",
     "delete_customer", "delete_worker"],
)
def test_unknown_ids_report_not_found(store, operation):
    result = getattr(store, operation)("x404")
    assert result.kind == ResultKind.NOT_FOUND
    assert not result.ok


def test_ids_are_not_reused_after_delete(store):
    for name in ("Drill", "Saw"):
        store.add_tool(
            {"name": name, "category": "Power Tools", "total_quantity": 1, "rate_per_day": 10}
        )
    store.delete_tool("t2")
    result = store.add_tool(
        {"name": "Grinder", "category": "Power Tools", "total_quantity": 1, "rate_per_day": 10}
    )
    assert result.value.id == "t3"


def test_counters_continue_from_seeded_ids():
    store = RentalStore(
        tools=[Tool("t7", "Ladder", "Access", 3, 3, 50.0)], today=lambda: TODAY
    )
    result = store.add_tool(
        {"name": "Drill", "category": "Power Tools", "total_quantity": 1, "rate_per_day": 10}
    )
    assert result.value.id == "t8"


def test_counters_hold_through_mixed_operations(stocked_store):
    first = _rent(stocked_store, quantity=12).value.id
    second = _rent(stocked_store, quantity=18).value.id
    _assert_counters_hold(stocked_store)
    assert stocked_store.get_tool("t1").available_quantity == 0
    stocked_store.cancel_rental(first)
    stocked_store.delete_rental(second)
    stocked_store.delete_rental(first)
    _assert_counters_hold(stocked_store)
    assert stocked_store.get_tool("t1").available_quantity == 30


# --------------------------------------------------------------------
# WORKERS AND ATTENDANCE
# --------------------------------------------------------------------
@pytest.fixture
def staffed_store(store):
    store.add_worker(
        {
            "name": "Suresh Patil",
            "phone_number": "9765432109",
            "role": "Manager",
            "joining_date": date(2023, 4, 1),
        }
    )
    return store


def test_marking_same_day_twice_updates_one_record(staffed_store):
    staffed_store.mark_attendance("w1", "Suresh Patil", TODAY, AttendanceStatus.PRESENT)
    result = staffed_store.mark_attendance("w1", "Suresh Patil", TODAY, "absent")
    assert result.ok
    assert len(staffed_store.attendance) == 1
    assert staffed_store.attendance[0].status == AttendanceStatus.ABSENT


def test_marking_another_day_adds_a_record(staffed_store):
    staffed_store.mark_attendance("w1", "Suresh Patil", TODAY, AttendanceStatus.PRESENT)
    staffed_store.mark_attendance(
        "w1", "Suresh Patil", TODAY - timedelta(days=1), AttendanceStatus.HALF_DAY
    )
    assert len(staffed_store.attendance) == 2
    assert len(staffed_store.attendance_for_date(TODAY)) == 1
    summary = staffed_store.attendance_summary("w1")
    assert (summary.present, summary.half_day, summary.absent) == (1, 1, 0)


def test_attendance_for_unknown_worker_is_not_found(staffed_store):
    result = staffed_store.mark_attendance("w9", "Nobody", TODAY, AttendanceStatus.PRESENT)
    assert result.kind == ResultKind.NOT_FOUND
    assert staffed_store.attendance == ()


def test_unknown_attendance_status_is_refused(staffed_store):
    result = staffed_store.mark_attendance("w1", "Suresh Patil", TODAY, "late")
    assert result.kind == ResultKind.INVARIANT_VIOLATION
    assert result.message == "Unknown attendance status: late."
    assert staffed_store.attendance == ()


def test_update_and_delete_worker(staffed_store):
    worker = staffed_store.get_worker("w1")
    staffed_store.update_worker(
        Worker(worker.id, worker.name, worker.phone_number, "Driver", worker.joining_date)
    )
    assert staffed_store.get_worker("w1").role == "Driver"
    assert staffed_store.delete_worker("w1").ok
    assert staffed_store.workers == ()


# --------------------------------------------------------------------
# DERIVED STATE AND BULK INSERT
# --------------------------------------------------------------------
def test_stats_follow_every_mutation(stocked_store):
    assert stocked_store.stats.rented_tools == 20
    rental_id = _rent(stocked_store, quantity=10).value.id
    stats = stocked_store.stats
    assert stats.rented_tools == 30
    assert stats.active_rentals == 1
    assert stats.today_new_rentals == 1
    assert stats.monthly_revenue == 150
    stocked_store.mark_rental_as_returned(rental_id)
    assert stocked_store.stats.active_rentals == 0
    assert stocked_store.stats.today_returns == 1


def test_returning_today_keeps_monthly_revenue(stocked_store):
    rental_id = _rent(stocked_store, start=TODAY - timedelta(days=4)).value.id
    before = stocked_store.stats.monthly_revenue
    assert before == 750.0
    stocked_store.mark_rental_as_returned(rental_id)
    assert stocked_store.stats.monthly_revenue == before


def test_applied_changes_carry_a_message(stocked_store):
    rental_id = _rent(stocked_store, quantity=1).value.id
    results = [
        stocked_store.mark_rental_as_returned(rental_id),
        stocked_store.delete_rental(rental_id),
        stocked_store.add_customer(
            {"name": "Anita Desai", "phone_number": "9900112233", "address": "Pune"}
        ),
    ]
    for result in results:
        assert result.ok
        assert result.message


def test_stats_do_not_depend_on_insertion_order():
    tools = [
        Tool("t1", "Drill", "Power Tools", 10, 8, 100.0),
        Tool("t2", "Ladder", "Access", 5, 5, 50.0),
    ]
    rentals = [
        Rental("r1", "t1", "Drill", 2, "c1", "Anita", TODAY - timedelta(days=3),
               TODAY + timedelta(days=2), 100.0),
        Rental("r2", "t2", "Ladder", 1, "c2", "Vijay", TODAY - timedelta(days=9),
               TODAY - timedelta(days=1), 50.0),
    ]
    forward = RentalStore(tools=tools, rentals=rentals, today=lambda: TODAY)
    backward = RentalStore(
        tools=list(reversed(tools)), rentals=list(reversed(rentals)), today=lambda: TODAY
    )
    assert forward.stats == backward.stats
    assert forward.revenue == backward.revenue
    assert forward.stats.overdue_rentals == 1


def test_bulk_add_rentals_matches_names_case_insensitively(stocked_store):
    results = stocked_store.bulk_add_rentals(
        [
            {
                "tool_name": "concrete mixer",
                "customer_name": "RAMESH BUILDERS",
                "quantity": 3,
                "start_date": TODAY,
                "expected_return_date": TODAY + timedelta(days=2),
                "rate_per_day": 20,
            },
            {
                "tool_name": "Jackhammer",
                "customer_name": "Ramesh Builders",
                "quantity": 1,
                "start_date": TODAY,
                "expected_return_date": TODAY,
            },
        ]
    )
    assert [result.kind for result in results] == [ResultKind.APPLIED, ResultKind.NOT_FOUND]
    assert stocked_store.rentals[0].rate_per_day == 20
    assert stocked_store.get_tool("t1").available_quantity == 27

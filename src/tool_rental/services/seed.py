"""Demo data for trying the application without importing a workbook."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, timedelta

from tool_rental.domain.models import AttendanceStatus
from tool_rental.logging_config import get_logger
from tool_rental.services.store import RentalStore

DEFAULT_SEED = 42


@dataclass(frozen=True)
class ToolSeed:
    name: str
    category: str
    total_quantity: int
    rate_per_day: float


TOOL_SEEDS = (
    ToolSeed("Concrete Mixer", "Construction", 8, 450.0),
    ToolSeed("Scaffolding Set", "Construction", 40, 120.0),
    ToolSeed("Power Drill", "Power Tools", 15, 150.0),
    ToolSeed("Angle Grinder", "Power Tools", 12, 120.0),
    ToolSeed("Generator 5kVA", "Electrical", 4, 900.0),
    ToolSeed("Ladder 12ft", "Access", 20, 60.0),
)

CUSTOMER_SEEDS = (
    ("Ramesh Builders", "9876543210", "12 MG Road, Pune"),
    ("Sharma Constructions", "9812345678", "45 Station Road, Nashik"),
    ("Anita Desai", "9900112233", "7 Lake View Colony, Pune"),
    ("Green Homes Pvt Ltd", "9822001122", "Plot 18, MIDC, Aurangabad"),
)

WORKER_SEEDS = (
    ("Suresh Patil", "9765432109", "Supervisor"),
    ("Imran Shaikh", "9754321098", "Helper"),
    ("Vijay More", "9743210987", "Driver"),
)


def seed_demo_data(store: RentalStore, seed: int = DEFAULT_SEED) -> None:
    """Fill an empty store with tools, customers, rentals, workers and attendance."""
    logger = get_logger(__name__)
    rng = random.Random(seed)
    today = store.today()

    tools = [
        store.add_tool(
            {
                "name": item.name,
                "category": item.category,
                "total_quantity": item.total_quantity,
                "rate_per_day": item.rate_per_day,
            }
        ).value
        for item in TOOL_SEEDS
    ]
    customers = [
        store.add_customer({"name": name, "phone_number": phone, "address": address}).value
        for name, phone, address in CUSTOMER_SEEDS
    ]

    for offset in (20, 12, 9, 5, 3, 1, 0):
        tool = rng.choice(tools)
        customer = rng.choice(customers)
        start = today - timedelta(days=offset)
        result = store.add_rental(
            {
                "tool_id": tool.id,
                "customer_id": customer.id,
                "quantity": rng.randint(1, max(1, min(3, tool.total_quantity // 4))),
                "start_date": start,
                "expected_return_date": start + timedelta(days=rng.choice((3, 7, 14))),
            }
        )
        if result.ok and offset >= 12:
            store.mark_rental_as_returned(result.value.id)

    workers = [
        store.add_worker(
            {
                "name": name,
                "phone_number": phone,
                "role": role,
                "joining_date": date(today.year - 1, 4, 1),
            }
        ).value
        for name, phone, role in WORKER_SEEDS
    ]
    statuses = list(AttendanceStatus)
    for offset in range(5):
        day = today - timedelta(days=offset)
        for worker in workers:
            status = AttendanceStatus.PRESENT if rng.random() < 0.7 else rng.choice(statuses)
            store.mark_attendance(worker.id, worker.name, day, status)

    logger.info(
        "Seeded %s tools, %s customers, %s rentals and %s workers",
        len(store.tools),
        len(store.customers),
        len(store.rentals),
        len(store.workers),
    )

from datetime import date, datetime

import pytest

from tool_rental.services.store import RentalStore

TODAY = date(2024, 5, 15)
NOW = datetime(2024, 5, 15, 17, 30)


@pytest.fixture
def store():
    return RentalStore(today=lambda: TODAY, now=lambda: NOW)


@pytest.fixture
def stocked_store(store):
    """Store holding one partly rented tool and one customer."""
    store.add_tool(
        {
            "name": "Concrete Mixer",
            "category": "Construction",
            "total_quantity": 50,
            "available_quantity": 30,
            "rate_per_day": 15,
        }
    )
    store.add_customer(
        {"name": "Ramesh Builders", "phone_number": "9876543210", "address": "12 MG Road"}
    )
    return store

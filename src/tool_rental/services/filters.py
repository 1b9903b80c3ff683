"""Search predicates used by the list screens."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from tool_rental.domain.models import Customer, Rental, RentalStatus, Tool, Worker
from tool_rental.services.stats import effective_status


def _contains(value: str, term: str) -> bool:
    return term.lower() in (value or "").lower()


def filter_tools(tools: Iterable[Tool], term: str) -> list[Tool]:
    term = term.strip()
    return [
        tool
        for tool in tools
        if not term or _contains(tool.name, term) or _contains(tool.category, term)
    ]


def filter_rentals(
    rentals: Iterable[Rental],
    term: str,
    status: Optional[RentalStatus] = None,
    today: Optional[date] = None,
) -> list[Rental]:
    term = term.strip()
    today = today or date.today()
    matches = []
    for rental in rentals:
        if term and not (
            _contains(rental.tool_name, term) or _contains(rental.customer_name, term)
        ):
            continue
        if status is not None and effective_status(rental, today) != status:
            continue
        matches.append(rental)
    return matches


def filter_customers(customers: Iterable[Customer], term: str) -> list[Customer]:
    term = term.strip()
    return [
        customer
        for customer in customers
        if not term
        or _contains(customer.name, term)
        or term in (customer.phone_number or "")
        or _contains(customer.address, term)
    ]


def filter_workers(workers: Iterable[Worker], term: str) -> list[Worker]:
    term = term.strip()
    return [
        worker
        for worker in workers
        if not term
        or _contains(worker.name, term)
        or term in (worker.phone_number or "")
        or _contains(worker.role, term)
    ]

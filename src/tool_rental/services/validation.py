"""Form-level validation applied before data reaches the store."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from tool_rental.domain.models import Tool
from tool_rental.services.errors import ValidationError


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return str(value).strip() if value is not None else ""


def _require_length(data: Mapping[str, Any], key: str, minimum: int, message: str) -> str:
    value = _text(data, key)
    if len(value) < minimum:
        raise ValidationError(message)
    return value


def _require_number(
    data: Mapping[str, Any], key: str, minimum: float, message: str
) -> float:
    try:
        value = float(data.get(key))  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError(message) from exc
    if value < minimum:
        raise ValidationError(message)
    return value


def validate_tool_form(data: Mapping[str, Any]) -> dict[str, Any]:
    name = _require_length(data, "name", 2, "Name must be at least 2 characters")
    category = _require_length(data, "category", 2, "Category is required")
    total_quantity = _require_number(
        data, "total_quantity", 1, "Quantity must be at least 1"
    )
    rate = _require_number(data, "rate_per_day", 1, "Rate must be at least 1")
    return {
        "name": name,
        "category": category,
        "total_quantity": int(total_quantity),
        "rate_per_day": rate,
        "image_url": _text(data, "image_url") or None,
    }


def validate_customer_form(data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "name": _require_length(data, "name", 2, "Name must be at least 2 characters"),
        "phone_number": _require_length(
            data, "phone_number", 10, "Phone number must be at least 10 digits"
        ),
        "address": _require_length(data, "address", 5, "Address is required"),
    }


def validate_worker_form(data: Mapping[str, Any]) -> dict[str, Any]:
    joining_date = data.get("joining_date")
    if not isinstance(joining_date, date):
        raise ValidationError("Joining date is required")
    return {
        "name": _require_length(data, "name", 2, "Name must be at least 2 characters"),
        "phone_number": _require_length(
            data, "phone_number", 10, "Phone number must be at least 10 digits"
        ),
        "role": _require_length(data, "role", 2, "Role is required"),
        "joining_date": joining_date,
    }


def validate_rental_form(
    data: Mapping[str, Any], tool: Optional[Tool]
) -> dict[str, Any]:
    if not _text(data, "tool_id") or tool is None:
        raise ValidationError("Please select a tool")
    if not _text(data, "customer_id"):
        raise ValidationError("Please select a customer")
    quantity = int(_require_number(data, "quantity", 1, "Quantity must be at least 1"))
    if quantity > tool.available_quantity:
        raise ValidationError(
            f"Only {tool.available_quantity} units of {tool.name} are available"
        )
    start_date = data.get("start_date")
    expected_return_date = data.get("expected_return_date")
    if not isinstance(start_date, date) or not isinstance(expected_return_date, date):
        raise ValidationError("Start and expected return dates are required")
    if expected_return_date < start_date:
        raise ValidationError("Expected return date cannot be before the start date")
    return {
        "tool_id": _text(data, "tool_id"),
        "customer_id": _text(data, "customer_id"),
        "quantity": quantity,
        "start_date": start_date,
        "expected_return_date": expected_return_date,
    }

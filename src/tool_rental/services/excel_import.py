"""Spreadsheet import for tools, rentals, customers and workers.

Reads one worksheet with ``openpyxl`` and turns each data row into a field
mapping the store understands. The worksheet named after the entity
(``tools``, ``rentals``...) is used when present, otherwise the active one.
The first row holds the column headers; header matching ignores case and
surrounding spaces. Rows are handled independently: a malformed row is
reported and the rest are still returned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

from openpyxl import load_workbook

from tool_rental.logging_config import get_logger
from tool_rental.services.errors import ImportFormatError
from tool_rental.utils.dates import to_date

SUPPORTED_SUFFIXES = (".xlsx", ".xlsm")


class ImportEntity(str, Enum):
    TOOLS = "tools"
    RENTALS = "rentals"
    CUSTOMERS = "customers"
    WORKERS = "workers"


@dataclass(frozen=True, slots=True)
class RowError:
    row_number: int
    message: str

    def __str__(self) -> str:
        return f"Row {self.row_number}: {self.message}"


@dataclass(slots=True)
class ParsedRow:
    row_number: int
    data: dict[str, Any]


@dataclass(slots=True)
class ParsedSheet:
    entity: ImportEntity
    rows: list[ParsedRow] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)


@dataclass(slots=True)
class ImportReport:
    """Outcome of importing one workbook into the store."""

    entity: ImportEntity
    imported: int = 0
    errors: list[RowError] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.errors)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _as_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    if not text:
        raise ValueError("value is empty")
    return text


def _as_positive_int(value: Any) -> int:
    number = float(value)
    if not number.is_integer() or number < 1:
        raise ValueError(f"expected a whole number of at least 1, got {value!r}")
    return int(number)


def _as_positive_float(value: Any) -> float:
    number = float(value)
    if number <= 0:
        raise ValueError(f"expected a positive amount, got {value!r}")
    return number


def _as_date(value: Any) -> date:
    if isinstance(value, (date, datetime)):
        return to_date(value)
    return to_date(str(value))


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    header: str
    field: str
    convert: Callable[[Any], Any]


COLUMN_SPECS: dict[ImportEntity, tuple[ColumnSpec, ...]] = {
    ImportEntity.TOOLS: (
        ColumnSpec("Name", "name", _as_text),
        ColumnSpec("Category", "category", _as_text),
        ColumnSpec("Total Quantity", "total_quantity", _as_positive_int),
        ColumnSpec("Rate Per Day", "rate_per_day", _as_positive_float),
    ),
    ImportEntity.RENTALS: (
        ColumnSpec("Tool Name", "tool_name", _as_text),
        ColumnSpec("Customer Name", "customer_name", _as_text),
        ColumnSpec("Start Date", "start_date", _as_date),
        ColumnSpec("Expected Return Date", "expected_return_date", _as_date),
        ColumnSpec("Quantity", "quantity", _as_positive_int),
        ColumnSpec("Rate Per Day", "rate_per_day", _as_positive_float),
    ),
    ImportEntity.CUSTOMERS: (
        ColumnSpec("Name", "name", _as_text),
        ColumnSpec("Phone Number", "phone_number", _as_text),
        ColumnSpec("Address", "address", _as_text),
    ),
    ImportEntity.WORKERS: (
        ColumnSpec("Name", "name", _as_text),
        ColumnSpec("Phone Number", "phone_number", _as_text),
        ColumnSpec("Role", "role", _as_text),
        ColumnSpec("Joining Date", "joining_date", _as_date),
    ),
}


def required_columns(entity: ImportEntity) -> list[str]:
    return [spec.header for spec in COLUMN_SPECS[entity]]


def _normalize_header(value: Any) -> str:
    return str(value).strip().casefold() if value is not None else ""


def read_sheet(workbook_path: Path, entity: ImportEntity | str) -> ParsedSheet:
    """Parse the worksheet for ``entity`` from an Excel workbook.

    Raises :class:`FileNotFoundError` if the workbook is missing and
    :class:`ImportFormatError` if it is not a supported workbook or lacks a
    required column.
    """
    entity = ImportEntity(entity)
    workbook_path = Path(workbook_path)
    logger = get_logger(__name__)
    if not workbook_path.exists():
        raise FileNotFoundError(f"Workbook not found: {workbook_path}")
    if workbook_path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ImportFormatError("Please select a valid Excel file (.xlsx)")

    try:
        workbook = load_workbook(filename=workbook_path, read_only=True, data_only=True)
    except Exception as exc:
        logger.exception("Failed to open workbook %s", workbook_path)
        raise ImportFormatError(f"Could not read {workbook_path.name}.") from exc

    parsed = ParsedSheet(entity=entity)
    try:
        if entity.value in workbook.sheetnames:
            sheet = workbook[entity.value]
        else:
            sheet = workbook.active
        rows = sheet.iter_rows(values_only=True)
        headers_row = next(rows, None)
        if headers_row is None:
            raise ImportFormatError("The worksheet is empty.")

        header_index = {
            _normalize_header(header): idx for idx, header in enumerate(headers_row)
        }
        specs = COLUMN_SPECS[entity]
        missing = [
            spec.header for spec in specs if spec.header.casefold() not in header_index
        ]
        if missing:
            raise ImportFormatError(
                "Missing required columns: " + ", ".join(missing)
            )

        for row_number, row in enumerate(rows, start=2):
            parsed_row = _parse_row(row_number, row, specs, header_index, parsed.errors)
            if parsed_row is not None:
                parsed.rows.append(parsed_row)
    finally:
        workbook.close()

    logger.info(
        "Parsed %s rows (%s invalid) from %s",
        len(parsed.rows),
        len(parsed.errors),
        workbook_path.name,
    )
    return parsed


def _parse_row(
    row_number: int,
    row: tuple[Any, ...],
    specs: tuple[ColumnSpec, ...],
    header_index: dict[str, int],
    errors: list[RowError],
) -> Optional[ParsedRow]:
    def _value(header: str) -> Any:
        idx = header_index[header.casefold()]
        return row[idx] if idx < len(row) else None

    values = {spec.header: _value(spec.header) for spec in specs}
    if all(_is_blank(value) for value in values.values()):
        return None

    data: dict[str, Any] = {}
    for spec in specs:
        raw = values[spec.header]
        if _is_blank(raw):
            errors.append(RowError(row_number, f"{spec.header} is required"))
            return None
        try:
            data[spec.field] = spec.convert(raw)
        except (TypeError, ValueError) as exc:
            errors.append(RowError(row_number, f"Invalid {spec.header}: {exc}"))
            return None
    return ParsedRow(row_number=row_number, data=data)

from datetime import datetime
from pathlib import Path

import pytest
from openpyxl import Workbook

from tool_rental.services.errors import ImportFormatError
from tool_rental.services.excel_import import ImportEntity, read_sheet, required_columns
from tool_rental.services.results import ResultKind

from conftest import TODAY


def _workbook(path, rows, title=None):
    wb = Workbook()
    ws = wb.active
    if title:
        ws.title = title
    for row in rows:
        ws.append(row)
    wb.save(path)
    return path


# --------------------------------------------------------------------
# SHEET PARSING
# --------------------------------------------------------------------
def test_read_tools_sheet(tmp_path):
    path = _workbook(
        tmp_path / "tools.xlsx",
        [
            ["Name", "Category", "Total Quantity", "Rate Per Day"],
            ["Power Drill", "Power Tools", 5, 150],
            [None, None, None, None],
            ["Ladder", "Access", 3, 60.5],
        ],
    )
    parsed = read_sheet(path, ImportEntity.TOOLS)
    assert parsed.errors == []
    assert [row.row_number for row in parsed.rows] == [2, 4]
    assert parsed.rows[0].data == {
        "name": "Power Drill",
        "category": "Power Tools",
        "total_quantity": 5,
        "rate_per_day": 150.0,
    }


def test_headers_match_regardless_of_case_and_order(tmp_path):
    path = _workbook(
        tmp_path / "customers.xlsx",
        [
            [" address ", "PHONE NUMBER", "name"],
            ["7 Lake View, Pune", 9900112233, "Anita Desai"],
        ],
    )
    parsed = read_sheet(path, "customers")
    assert parsed.rows[0].data == {
        "name": "Anita Desai",
        "phone_number": "9900112233",
        "address": "7 Lake View, Pune",
    }


def test_sheet_named_after_entity_is_preferred(tmp_path):
    wb = Workbook()
    wb.active.append(["Something", "Else"])
    workers = wb.create_sheet("workers")
    workers.append(["Name", "Phone Number", "Role", "Joining Date"])
    workers.append(["Suresh Patil", "9765432109", "Manager", datetime(2023, 4, 1)])
    path = tmp_path / "book.xlsx"
    wb.save(path)

    parsed = read_sheet(path, ImportEntity.WORKERS)
    assert parsed.rows[0].data["joining_date"] == datetime(2023, 4, 1).date()


def test_bad_rows_are_reported_and_skipped(tmp_path):
    path = _workbook(
        tmp_path / "tools.xlsx",
        [
            ["Name", "Category", "Total Quantity", "Rate Per Day"],
            ["Drill", None, 5, 150],
            ["Saw", "Power Tools", 2.5, 80],
            ["Grinder", "Power Tools", 4, 120],
        ],
    )
    parsed = read_sheet(path, ImportEntity.TOOLS)
    assert len(parsed.rows) == 1
    assert str(parsed.errors[0]) == "Row 2: Category is required"
    assert parsed.errors[1].row_number == 3
    assert parsed.errors[1].message.startswith("Invalid Total Quantity")


def test_missing_columns_fail_the_whole_sheet(tmp_path):
    path = _workbook(tmp_path / "tools.xlsx", [["Name", "Category"], ["Drill", "Power"]])
    with pytest.raises(ImportFormatError, match="Missing required columns: Total Quantity"):
        read_sheet(path, ImportEntity.TOOLS)


def test_unsupported_or_missing_files(tmp_path):
    legacy = tmp_path / "tools.xls"
    legacy.write_bytes(b"not a workbook")
    with pytest.raises(ImportFormatError, match="valid Excel file"):
        read_sheet(legacy, ImportEntity.TOOLS)
    broken = tmp_path / "broken.xlsx"
    broken.write_bytes(b"not a zip archive")
    with pytest.raises(ImportFormatError):
        read_sheet(broken, ImportEntity.TOOLS)
    with pytest.raises(FileNotFoundError):
        read_sheet(Path("nonexistent.xlsx"), ImportEntity.TOOLS)


def test_required_columns_for_rentals():
    assert required_columns(ImportEntity.RENTALS) == [
        "Tool Name",
        "Customer Name",
        "Start Date",
        "Expected Return Date",
        "Quantity",
        "Rate Per Day",
    ]


# --------------------------------------------------------------------
# STORE IMPORT
# --------------------------------------------------------------------
def test_import_rentals_into_store(tmp_path, stocked_store):
    path = _workbook(
        tmp_path / "rentals.xlsx",
        [
            required_columns(ImportEntity.RENTALS),
            ["Concrete Mixer", "ramesh builders", TODAY.isoformat(), "2024-05-20", 4, 15],
            ["Concrete Mixer", "Unknown Co", TODAY.isoformat(), "2024-05-20", 1, 15],
            ["Concrete Mixer", "Ramesh Builders", TODAY.isoformat(), "2024-05-20", 99, 15],
        ],
    )
    report = stocked_store.import_from_excel(path, ImportEntity.RENTALS)

    assert report.imported == 1
    assert report.skipped == 2
    assert [error.row_number for error in report.errors] == [3, 4]
    assert "was not found" in report.errors[0].message
    assert stocked_store.get_tool("t1").available_quantity == 26
    assert stocked_store.get_customer("c1").active_rentals == 1


def test_import_tools_refused_by_store_are_reported(tmp_path, store):
    path = _workbook(
        tmp_path / "tools.xlsx",
        [
            required_columns(ImportEntity.TOOLS),
            ["Drill", "Power Tools", 5, 150],
            ["Saw", "Power Tools", 2, -10],
        ],
    )
    report = store.import_from_excel(path, "tools")
    assert report.imported == 1
    assert str(report.errors[0]).startswith("Row 3: Invalid Rate Per Day")
    results = store.bulk_add_tools(
        [{"name": "Saw", "category": "Power Tools", "total_quantity": 2, "rate_per_day": 0}]
    )
    assert results[0].kind == ResultKind.INVARIANT_VIOLATION

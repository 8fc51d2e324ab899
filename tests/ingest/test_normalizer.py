from __future__ import annotations

from src.attendance_import.attendance_import.ingest.normalizer import CANONICAL_FIELDS, normalize_record


def test_maps_variants_to_canonical_keys():
    row = {
        "employeeName": "Jane Doe",
        "emp_id": "7",
        "employee_email": "jane@example.com",
        "attendance_date": "2024-01-10",
        "check_in": "09:00",
        "checkout": "17:00",
        "hours": "8",
    }

    assert normalize_record(row) == {
        "Employee Name": "Jane Doe",
        "Employee ID": "7",
        "Email": "jane@example.com",
        "Date": "2024-01-10",
        "Time In": "09:00",
        "Time Out": "17:00",
        "Hours Worked": "8",
    }


def test_first_variant_in_priority_order_wins():
    row = {"Name": "Last", "employee": "Middle", "name": "First"}
    assert normalize_record(row)["Employee Name"] == "First"


def test_empty_and_none_values_are_skipped():
    row = {"employeeName": "", "name": None, "Employee": "Jane"}
    assert normalize_record(row) == {"Employee Name": "Jane"}


def test_missing_fields_are_absent_not_none():
    normalized = normalize_record({"date": "2024-01-10"})
    assert normalized == {"Date": "2024-01-10"}
    assert "Employee Name" not in normalized


def test_canonical_headers_pass_through():
    row = {"Employee Name": "Jane Doe", "Employee ID": "7", "Hours Worked": "8"}
    assert normalize_record(row) == row


def test_zero_value_is_kept():
    assert normalize_record({"hours": 0}) == {"Hours Worked": 0}


def test_never_raises_and_keys_are_canonical():
    for row in ({}, {"unrelated": "x"}, {"Date": "2024-01-01", "noise": 1}, None, 42, "text", ["a"]):
        normalized = normalize_record(row)
        assert set(normalized) <= CANONICAL_FIELDS

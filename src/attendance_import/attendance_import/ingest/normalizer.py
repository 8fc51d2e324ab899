"""Map heterogeneous spreadsheet/device field names onto canonical keys."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

EMPLOYEE_NAME = "Employee Name"
EMPLOYEE_ID = "Employee ID"
EMAIL = "Email"
DATE = "Date"
TIME_IN = "Time In"
TIME_OUT = "Time Out"
HOURS_WORKED = "Hours Worked"

# Variants in priority order. The canonical key closes each list so rows that
# already use canonical headers pass through unchanged.
FIELD_MAPPINGS: dict[str, tuple[str, ...]] = {
    EMPLOYEE_NAME: ("employeeName", "name", "employee", "Employee", "Name", EMPLOYEE_NAME),
    EMPLOYEE_ID: ("employeeId", "id", "emp_id", "employee_id", "ID", EMPLOYEE_ID),
    EMAIL: ("email", "Email", "employee_email", "employeeEmail"),
    DATE: ("date", "Date", "attendance_date", "attendanceDate"),
    TIME_IN: ("timeIn", "time_in", "checkin", "check_in", "Time In"),
    TIME_OUT: ("timeOut", "time_out", "checkout", "check_out", "Time Out"),
    HOURS_WORKED: ("hoursWorked", "hours_worked", "hours", "Hours", HOURS_WORKED),
}

CANONICAL_FIELDS = frozenset(FIELD_MAPPINGS)


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def normalize_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Return the canonical view of a raw row.

    A canonical key is set only when one of its variants holds a non-empty
    value; absent fields are left out rather than set to None. Non-mapping
    input yields an empty record.
    """

    normalized: dict[str, Any] = {}
    if not isinstance(record, Mapping):
        return normalized

    for standard_field, variants in FIELD_MAPPINGS.items():
        for variant in variants:
            value = record.get(variant)
            if _is_present(value):
                normalized[standard_field] = value
                break
    return normalized

from __future__ import annotations

import traceback
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..common.datetime_utils import parse_attendance_date
from ..core.constants import REQUIRED_FIELDS
from ..core.enums import EmployeeStatus, ErrorType
from ..employees.model import Employee, EmployeeDirectory
from .model import ProcessedRecord, RecordError
from .normalizer import DATE, normalize_record
from .resolver import IdentityResolver


def validate_record(record: Mapping[str, Any]) -> list[RecordError]:
    """Required fields and date format of a normalized record."""
    errors: list[RecordError] = []

    for name in REQUIRED_FIELDS:
        if name not in record:
            errors.append(RecordError(type=ErrorType.MISSING_FIELD, field=name, message=f"{name} is required"))

    if DATE in record and parse_attendance_date(record[DATE]) is None:
        errors.append(
            RecordError(
                type=ErrorType.INVALID_DATE,
                field=DATE,
                value=str(record[DATE]),
                message="Invalid date format",
            )
        )
    return errors


@dataclass(frozen=True)
class RecordClassifier:
    """Turn one raw row into a ProcessedRecord.

    received -> normalized -> validated | rejected -> new employee | existing.
    Unexpected exceptions become a ``processing_error`` on the row.
    """

    resolver: IdentityResolver = field(default_factory=IdentityResolver)

    def classify(self, row: Any, directory: EmployeeDirectory, index: int) -> ProcessedRecord:
        if not isinstance(row, Mapping):
            return ProcessedRecord(
                original_row=row,
                index=index,
                errors=(
                    RecordError(
                        type=ErrorType.INVALID_RECORD_FORMAT,
                        message="Invalid record format",
                        value=type(row).__name__,
                    ),
                ),
            )

        try:
            normalized = normalize_record(row)

            errors = validate_record(normalized)
            if errors:
                return ProcessedRecord(original_row=row, index=index, errors=tuple(errors))

            resolution = self.resolver.resolve(normalized, directory)
            if not resolution.found:
                return ProcessedRecord(
                    original_row=row,
                    index=index,
                    is_valid=True,
                    is_new_employee=True,
                    processed_data={
                        **normalized,
                        "employeeStatus": EmployeeStatus.NEW.value,
                        "suggestedEmployee": resolution.suggestions,
                    },
                )

            employee = resolution.employee
            return ProcessedRecord(
                original_row=row,
                index=index,
                is_valid=True,
                is_duplicate=self.check_duplicate(normalized, employee),
                processed_data={
                    **normalized,
                    "employeeId": employee.employee_id,
                    "employeeStatus": EmployeeStatus.EXISTING.value,
                    "matchedBy": resolution.matched_by,
                },
            )
        except Exception as exc:
            return ProcessedRecord(
                original_row=row,
                index=index,
                errors=(
                    RecordError(
                        type=ErrorType.PROCESSING_ERROR,
                        message=str(exc),
                        stack=traceback.format_exc(),
                    ),
                ),
            )

    def check_duplicate(self, record: Mapping[str, Any], employee: Employee) -> bool:
        # Stored-record duplicates are detected by the persistence sink at write time.
        return False

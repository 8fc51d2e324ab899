"""Ví dụ: chạy pipeline nhập chấm công qua service layer (không qua Flask, không DB).

Usage: python examples/example_usage.py [path/to/export.xlsx]
"""

import json
import sys

from src.attendance_import.attendance_import.employees.model import Employee, EmployeeDirectory
from src.attendance_import.attendance_import.ingest.service import AttendanceImportService
from src.attendance_import.attendance_import.ingest.settings import ImportSettings
from src.attendance_import.attendance_import.ingest.spreadsheet_reader import read_spreadsheet
from src.attendance_import.attendance_import.workers.pool import WorkerPool

SAMPLE_ROWS = [
    {"Employee Name": "Jane Doe", "Date": "2024-01-10", "Time In": "09:00", "Time Out": "17:30"},
    {"name": "Jane Mary Doe", "date": "2024-01-10"},
    {"employee_id": "9", "date": "not a date"},
    42,
]


def main():
    directory = EmployeeDirectory.build(
        [
            Employee(employee_id=7, first_name="Jane", last_name="Doe", email="jane@example.com"),
            Employee(employee_id=8, first_name="Jane Mary", last_name="Doe Smith"),
        ]
    )
    rows = read_spreadsheet(sys.argv[1]).rows if len(sys.argv) > 1 else SAMPLE_ROWS

    settings = ImportSettings(batch_size=2, pool_size=2)
    with WorkerPool(settings.pool_size, timeout=settings.worker_timeout) as pool:
        service = AttendanceImportService(pool, settings=settings)
        summary = service.run_import(rows, directory)
        print(json.dumps(summary.to_dict()["stats"], indent=2))
        print(json.dumps(pool.get_stats(), indent=2))


if __name__ == "__main__":
    main()

from __future__ import annotations

import pandas as pd
import pytest

from src.attendance_import.attendance_import.core.exceptions import SpreadsheetReadError, ValidationError
from src.attendance_import.attendance_import.ingest.spreadsheet_reader import allowed_file, read_spreadsheet


def test_reads_csv_as_strings_and_skips_blank_rows(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text("Employee Name,Employee ID,Date\nJane Doe,007,2024-01-10\n,,\nBob,,2024-01-11\n", encoding="utf-8")

    sheet = read_spreadsheet(path)

    assert sheet.sheet_name is None
    assert sheet.record_count == 2
    assert sheet.rows[0] == {"Employee Name": "Jane Doe", "Employee ID": "007", "Date": "2024-01-10"}
    assert sheet.rows[1]["Employee ID"] == ""


def test_reads_first_excel_sheet(tmp_path):
    path = tmp_path / "export.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame([{"name": "Jane Doe", "date": "2024-01-10", "hours": 8}]).to_excel(
            writer, sheet_name="March", index=False
        )
        pd.DataFrame([{"other": 1}]).to_excel(writer, sheet_name="Second", index=False)

    sheet = read_spreadsheet(path)

    assert sheet.sheet_name == "March"
    assert sheet.rows == [{"name": "Jane Doe", "date": "2024-01-10", "hours": "8"}]


def test_header_only_file_has_no_data(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("Employee Name,Date\n", encoding="utf-8")

    with pytest.raises(SpreadsheetReadError):
        read_spreadsheet(path)


def test_missing_file(tmp_path):
    with pytest.raises(SpreadsheetReadError):
        read_spreadsheet(tmp_path / "nope.xlsx")


def test_unsupported_extension(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("x", encoding="utf-8")

    with pytest.raises(ValidationError):
        read_spreadsheet(path)


def test_allowed_file():
    assert allowed_file("March.XLSX")
    assert allowed_file("a.csv")
    assert allowed_file("legacy.xls")
    assert not allowed_file("a.pdf")
    assert not allowed_file("noext")


def test_corrupt_xls_is_a_read_error(tmp_path):
    path = tmp_path / "legacy.xls"
    path.write_bytes(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 512)

    with pytest.raises(SpreadsheetReadError):
        read_spreadsheet(path)


def test_missing_excel_engine_is_a_read_error(tmp_path, monkeypatch):
    path = tmp_path / "legacy.xls"
    path.write_bytes(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1")

    def no_engine(*args, **kwargs):
        raise ImportError("Missing optional dependency 'xlrd'")

    monkeypatch.setattr(pd, "ExcelFile", no_engine)

    with pytest.raises(SpreadsheetReadError, match="xlrd"):
        read_spreadsheet(path)

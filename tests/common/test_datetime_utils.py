from datetime import date, datetime

from src.attendance_import.attendance_import.common.datetime_utils import parse_attendance_date, utc_now_iso


def test_parse_date_and_datetime_objects():
    assert parse_attendance_date(date(2024, 1, 10)) == date(2024, 1, 10)
    assert parse_attendance_date(datetime(2024, 1, 10, 9, 30)) == date(2024, 1, 10)


def test_parse_strings():
    assert parse_attendance_date("2024-01-10") == date(2024, 1, 10)
    assert parse_attendance_date(" 2024/01/10 ") == date(2024, 1, 10)
    assert parse_attendance_date("January 10, 2024") == date(2024, 1, 10)
    assert parse_attendance_date("Jan 10 2024") == date(2024, 1, 10)
    assert parse_attendance_date("January 10 2024") == date(2024, 1, 10)
    assert parse_attendance_date("Wed Jan 10 2024") == date(2024, 1, 10)


def test_rejects_garbage():
    assert parse_attendance_date("") is None
    assert parse_attendance_date("13/45/2024") is None
    assert parse_attendance_date(20240110) is None
    assert parse_attendance_date(None) is None


def test_utc_now_iso_is_parseable():
    assert datetime.fromisoformat(utc_now_iso()).tzinfo is not None

from __future__ import annotations

import logging
from typing import Sequence

from ..common.datetime_utils import parse_attendance_date
from ..common.string_utils import safe_encode_text
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import ProcessedRecord
from .normalizer import DATE, HOURS_WORKED, TIME_IN, TIME_OUT
from .repository import AttendanceRecordSink, StoreResult

logger = logging.getLogger(__name__)


def _text(value) -> str | None:
    if value is None or value == "":
        return None
    return safe_encode_text(str(value))


class MySQLAttendanceSink(AttendanceRecordSink):
    def __init__(self, conn_factory: DatabaseConnection, *, source: str = "import"):
        self._conn_factory = conn_factory
        self._source = source

    def store(self, records: Sequence[ProcessedRecord]) -> StoreResult:
        inserted = 0
        duplicates: list[ProcessedRecord] = []
        skipped: list[ProcessedRecord] = []

        with db_cursor(self._conn_factory) as (_, cur):
            for record in records:
                data = record.processed_data or {}
                employee_id = record.employee_id
                work_date = parse_attendance_date(data.get(DATE))
                if employee_id is None or work_date is None:
                    skipped.append(record)
                    continue

                cur.execute(
                    "SELECT id FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                    (employee_id, work_date),
                )
                if fetchone(cur):
                    duplicates.append(record)
                    continue

                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, time_in, time_out, hours_worked, source)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        employee_id,
                        work_date,
                        _text(data.get(TIME_IN)),
                        _text(data.get(TIME_OUT)),
                        _text(data.get(HOURS_WORKED)),
                        self._source,
                    ),
                )
                inserted += 1

        logger.info("Stored %d attendance records (%d duplicates, %d skipped)", inserted, len(duplicates), len(skipped))
        return StoreResult(inserted=inserted, duplicates=tuple(duplicates), skipped=tuple(skipped))

from __future__ import annotations

import dataclasses
import logging
import time
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_attendance_date
from ..common.validators import require_positive_int
from ..employees.model import EmployeeDirectory
from ..employees.repository import EmployeeDirectoryProvider
from ..workers.batch_processor import BatchPayload
from ..workers.pool import WorkerPool
from .model import BatchOutcome, FailedBatch, ImportSummary
from .normalizer import DATE
from .repository import AttendanceRecordSink, StoreResult
from .settings import ImportSettings

logger = logging.getLogger(__name__)


def chunk_rows(rows: Sequence[Any], batch_size: int) -> list[list[Any]]:
    batch_size = require_positive_int(batch_size, "batch_size")
    return [list(rows[i : i + batch_size]) for i in range(0, len(rows), batch_size)]


def mark_in_import_duplicates(summary: ImportSummary) -> ImportSummary:
    """Move repeated (employee, date) rows of one import into ``duplicates``.

    The earliest row (by original index) stays valid. Rows of new employees
    have no id yet and are never touched.
    """

    seen: set[tuple[int, Any]] = set()
    kept = []
    moved = []
    for record in sorted(summary.valid_records, key=lambda r: r.index):
        employee_id = record.employee_id
        work_date = parse_attendance_date((record.processed_data or {}).get(DATE))
        if employee_id is None or work_date is None:
            kept.append(record)
            continue
        key = (employee_id, work_date)
        if key in seen:
            moved.append(dataclasses.replace(record, is_duplicate=True))
        else:
            seen.add(key)
            kept.append(record)

    if not moved:
        return summary

    stats = dataclasses.replace(
        summary.stats,
        valid=summary.stats.valid - len(moved),
        duplicates=summary.stats.duplicates + len(moved),
    )
    duplicates = tuple(sorted(summary.duplicates + tuple(moved), key=lambda r: r.index))
    return dataclasses.replace(summary, valid_records=tuple(kept), duplicates=duplicates, stats=stats)


class AttendanceImportService:
    """Split an import into batches, run them on the worker pool, merge results."""

    def __init__(
        self,
        pool: WorkerPool,
        directory_provider: Optional[EmployeeDirectoryProvider] = None,
        sink: Optional[AttendanceRecordSink] = None,
        *,
        settings: Optional[ImportSettings] = None,
    ):
        self._pool = pool
        self._directories = directory_provider
        self._sink = sink
        self._settings = settings or ImportSettings()

    @property
    def pool(self) -> WorkerPool:
        return self._pool

    def _payload(self, rows: Sequence[Any], directory: EmployeeDirectory, *, batch_index: int, start_index: int):
        return BatchPayload(
            rows=list(rows),
            directory=directory,
            batch_index=batch_index,
            start_index=start_index,
            threshold=self._settings.suggestion_threshold,
            max_suggestions=self._settings.max_suggestions,
        )

    def submit_batch(
        self,
        rows: Sequence[Any],
        directory: EmployeeDirectory,
        *,
        batch_index: int = 0,
        start_index: int = 0,
    ) -> BatchOutcome:
        """Run one batch on an isolated worker and wait for its outcome."""
        return self._pool.execute(self._payload(rows, directory, batch_index=batch_index, start_index=start_index))

    def _directory(self, directory: Optional[EmployeeDirectory]) -> EmployeeDirectory:
        if directory is not None:
            return directory
        if self._directories is None:
            return EmployeeDirectory()
        return self._directories.get_directory()

    def run_import(self, rows: Sequence[Any], directory: Optional[EmployeeDirectory] = None) -> ImportSummary:
        started = time.monotonic()
        directory = self._directory(directory)
        batches = chunk_rows(rows, self._settings.batch_size)

        logger.info(
            "Importing %d rows in %d batches against %d employees",
            len(rows),
            len(batches),
            len(directory),
        )

        futures = []
        start_index = 0
        for batch_index, batch in enumerate(batches):
            payload = self._payload(batch, directory, batch_index=batch_index, start_index=start_index)
            futures.append((batch_index, start_index, len(batch), self._pool.submit(payload)))
            start_index += len(batch)

        # Merge in submission order; completion order does not matter.
        summary = ImportSummary(total_rows=len(rows))
        for batch_index, batch_start, row_count, future in futures:
            try:
                outcome = future.result()
            except Exception as exc:
                error = str(exc) or type(exc).__name__
                logger.warning("Batch %d failed: %s", batch_index, error)
                summary = summary.with_failure(FailedBatch(batch_index, batch_start, row_count, error))
                continue

            if not outcome.success or outcome.results is None:
                logger.warning("Batch %d failed: %s", batch_index, outcome.error)
                summary = summary.with_failure(
                    FailedBatch(batch_index, batch_start, row_count, outcome.error or "Worker job failed")
                )
                continue
            summary = summary.merge(outcome.results)

        if self._settings.dedupe_within_import:
            summary = mark_in_import_duplicates(summary)

        summary = dataclasses.replace(summary, duration_seconds=time.monotonic() - started)
        logger.info(
            "Import finished: processed=%d valid=%d duplicates=%d new_employees=%d errors=%d failed_batches=%d",
            summary.stats.processed,
            summary.stats.valid,
            summary.stats.duplicates,
            summary.stats.new_employees,
            summary.stats.errors,
            len(summary.failed_batches),
        )
        return summary

    def store(self, summary: ImportSummary) -> Optional[StoreResult]:
        if self._sink is None:
            return None
        return self._sink.store(summary.valid_records)

    def import_rows(self, rows: Sequence[Any], directory: Optional[EmployeeDirectory] = None):
        summary = self.run_import(rows, directory)
        return summary, self.store(summary)

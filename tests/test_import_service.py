from __future__ import annotations

import time

import pytest

from src.attendance_import.attendance_import.core.exceptions import ValidationError
from src.attendance_import.attendance_import.employees.model import EmployeeDirectory
from src.attendance_import.attendance_import.ingest.model import BatchOutcome
from src.attendance_import.attendance_import.ingest.repository import StoreResult
from src.attendance_import.attendance_import.ingest.service import AttendanceImportService, chunk_rows
from src.attendance_import.attendance_import.ingest.settings import ImportSettings
from src.attendance_import.attendance_import.workers.batch_processor import handle_payload
from src.attendance_import.attendance_import.workers.pool import WorkerPool


def _hang_on_second_batch(conn, payload):
    if payload.batch_index == 1:
        time.sleep(60)
    conn.send(handle_payload(payload))
    conn.close()


def _reject_everything(conn, payload):
    conn.send(BatchOutcome(success=False, processed_at="now", error="Invalid data received"))
    conn.close()


class FakeDirectoryProvider:
    def __init__(self, directory: EmployeeDirectory):
        self._directory = directory
        self.calls = 0

    def get_directory(self) -> EmployeeDirectory:
        self.calls += 1
        return self._directory


class FakeSink:
    def __init__(self):
        self.stored = []

    def store(self, records):
        self.stored.extend(records)
        return StoreResult(inserted=len(records))


def _valid_rows(n):
    return [{"Employee Name": "Jane Doe", "Date": "2024-01-%02d" % (i % 28 + 1)} for i in range(n)]


def test_chunk_rows():
    assert chunk_rows([], 10) == []
    assert [len(b) for b in chunk_rows(list(range(25)), 10)] == [10, 10, 5]
    with pytest.raises(ValidationError):
        chunk_rows([1], 0)


def test_hundred_rows_on_four_workers(directory):
    settings = ImportSettings(batch_size=10, pool_size=4)
    with WorkerPool(settings.pool_size, timeout=30) as pool:
        service = AttendanceImportService(pool, settings=settings)
        summary = service.run_import(_valid_rows(100), directory)

    assert summary.success
    assert summary.batch_count == 10
    assert summary.total_rows == 100
    assert summary.stats.processed == 100
    assert summary.stats.valid == 100
    assert [r.index for r in summary.valid_records] == list(range(100))
    assert len(summary.memory_usage) == 10


def test_mixed_rows_keep_import_level_indexes(directory):
    rows = [
        {"Employee Name": "Jane Doe", "Date": "2024-01-10"},
        {"Employee Name": "Jane Mary Doe", "Date": "2024-01-10"},
        42,
        {"Employee Name": "Jane Doe"},
        {"Email": "jane.doe@example.com", "Employee Name": "J. Doe", "Date": "bad"},
    ]
    settings = ImportSettings(batch_size=2, pool_size=2)
    with WorkerPool(settings.pool_size, timeout=30) as pool:
        summary = AttendanceImportService(pool, settings=settings).run_import(rows, directory)

    assert summary.stats.processed == 5
    assert summary.stats.valid == 2
    assert summary.stats.new_employees == 1
    assert summary.stats.errors == 3
    assert [e.index for e in summary.errors] == [2, 3, 4]
    assert summary.new_employees[0].index == 1
    assert summary.stats.processed == len(summary.valid_records) + len(summary.duplicates) + len(summary.errors)


def test_empty_import(directory):
    with WorkerPool(1, timeout=5) as pool:
        summary = AttendanceImportService(pool).run_import([], directory)

    assert summary.batch_count == 0
    assert summary.stats.processed == 0
    assert summary.success


def test_hung_batch_fails_as_a_whole(directory, fork_start_method):
    settings = ImportSettings(batch_size=3, pool_size=2, worker_timeout=0.5)
    pool = WorkerPool(
        settings.pool_size,
        timeout=settings.worker_timeout,
        target=_hang_on_second_batch,
        start_method=fork_start_method,
    )
    with pool:
        summary = AttendanceImportService(pool, settings=settings).run_import(_valid_rows(9), directory)

    assert not summary.success
    assert summary.batch_count == 3
    assert len(summary.failed_batches) == 1
    failed = summary.failed_batches[0]
    assert (failed.batch_index, failed.start_index, failed.row_count) == (1, 3, 3)
    assert "timed out" in failed.error
    assert summary.stats.processed == 6
    assert [r.index for r in summary.valid_records] == [0, 1, 2, 6, 7, 8]


def test_batch_level_failure_outcome(directory, fork_start_method):
    with WorkerPool(1, timeout=5, target=_reject_everything, start_method=fork_start_method) as pool:
        summary = AttendanceImportService(pool, settings=ImportSettings(batch_size=5)).run_import(
            _valid_rows(7), directory
        )

    assert [f.row_count for f in summary.failed_batches] == [5, 2]
    assert summary.stats.processed == 0
    assert summary.failed_batches[0].error == "Invalid data received"


def test_directory_comes_from_provider_and_sink_gets_valid_records(directory):
    provider = FakeDirectoryProvider(directory)
    sink = FakeSink()
    with WorkerPool(1, timeout=30) as pool:
        service = AttendanceImportService(pool, provider, sink, settings=ImportSettings(batch_size=2))
        summary, stored = service.import_rows(_valid_rows(3) + [{"Employee Name": "Nobody"}])

    assert provider.calls == 1
    assert stored.inserted == 3
    assert [r.index for r in sink.stored] == [0, 1, 2]
    assert summary.stats.errors == 1


def test_store_without_sink_is_noop(directory):
    with WorkerPool(1, timeout=30) as pool:
        service = AttendanceImportService(pool)
        summary = service.run_import(_valid_rows(1), directory)
        assert service.store(summary) is None


def test_submit_batch(directory):
    with WorkerPool(1, timeout=30) as pool:
        outcome = AttendanceImportService(pool).submit_batch(_valid_rows(2), directory, start_index=5)

    assert outcome.success
    assert [r.index for r in outcome.results.valid_records] == [5, 6]


def test_dedupe_within_import_moves_repeats(directory):
    rows = [
        {"Employee Name": "Jane Doe", "Date": "2024-01-10"},
        {"Employee ID": "7", "Employee Name": "Jane", "Date": "2024-01-10"},
        {"Employee Name": "Jane Doe", "Date": "2024-01-11"},
        {"Employee Name": "Stranger", "Date": "2024-01-10"},
        {"Employee Name": "Stranger", "Date": "2024-01-10"},
    ]
    settings = ImportSettings(batch_size=1, pool_size=2, dedupe_within_import=True)
    with WorkerPool(settings.pool_size, timeout=30) as pool:
        summary = AttendanceImportService(pool, settings=settings).run_import(rows, directory)

    assert [r.index for r in summary.duplicates] == [1]
    assert summary.duplicates[0].is_duplicate
    assert summary.stats.duplicates == 1
    assert summary.stats.valid == 4
    assert summary.stats.processed == len(summary.valid_records) + len(summary.duplicates) + len(summary.errors)


def test_settings_from_module():
    class Settings:
        IMPORT_BATCH_SIZE = 50
        WORKER_POOL_SIZE = 3
        WORKER_TIMEOUT_SECONDS = 12
        SUGGESTION_THRESHOLD = 0.5
        MAX_SUGGESTIONS = 5
        DEDUPE_WITHIN_IMPORT = True

    settings = ImportSettings.from_settings(Settings)

    assert settings == ImportSettings(
        batch_size=50,
        pool_size=3,
        worker_timeout=12.0,
        suggestion_threshold=0.5,
        max_suggestions=5,
        dedupe_within_import=True,
    )


def test_settings_validation():
    with pytest.raises(ValidationError):
        ImportSettings(batch_size=0)
    with pytest.raises(ValidationError):
        ImportSettings(suggestion_threshold=1.5)

"""Batch classification run inside an isolated worker process.

The worker receives one batch of raw rows plus one directory snapshot, and
answers with a single ``BatchOutcome`` message. Nothing here touches the
database or shared state.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..common.datetime_utils import utc_now_iso
from ..core.constants import DEFAULT_MAX_SUGGESTIONS, DEFAULT_SUGGESTION_THRESHOLD
from ..employees.model import EmployeeDirectory
from ..ingest.classifier import RecordClassifier
from ..ingest.model import BatchOutcome, BatchResult, BatchStats, ProcessedRecord, RowFailure
from ..ingest.resolver import IdentityResolver

try:
    import resource
except ImportError:  # Windows
    resource = None


@dataclass(frozen=True)
class BatchPayload:
    rows: Optional[Sequence[Any]]
    directory: Optional[EmployeeDirectory]
    batch_index: int = 0
    start_index: int = 0
    threshold: float = DEFAULT_SUGGESTION_THRESHOLD
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS


def memory_usage() -> dict:
    """Resource usage of the current process (max RSS in kilobytes on Linux)."""
    if resource is None:
        return {}
    usage = resource.getrusage(resource.RUSAGE_SELF)
    return {
        "maxRss": usage.ru_maxrss,
        "userTime": round(usage.ru_utime, 4),
        "systemTime": round(usage.ru_stime, 4),
    }


def process_batch(
    batch: Sequence[Any],
    directory: EmployeeDirectory,
    *,
    classifier: Optional[RecordClassifier] = None,
    start_index: int = 0,
) -> BatchOutcome:
    classifier = classifier or RecordClassifier()
    try:
        valid: list[ProcessedRecord] = []
        duplicates: list[ProcessedRecord] = []
        new_employees: list[ProcessedRecord] = []
        errors: list = []
        processed = 0

        for offset, row in enumerate(batch):
            index = start_index + offset
            processed += 1
            try:
                record = classifier.classify(row, directory, index)
                if not record.is_valid:
                    errors.append(record)
                elif record.is_duplicate:
                    duplicates.append(record)
                else:
                    valid.append(record)
                    if record.is_new_employee:
                        new_employees.append(record)
            except Exception as exc:
                errors.append(RowFailure(record=row, error=str(exc), index=index, stack=traceback.format_exc()))

        results = BatchResult(
            valid_records=tuple(valid),
            duplicates=tuple(duplicates),
            new_employees=tuple(new_employees),
            errors=tuple(errors),
            stats=BatchStats(
                processed=processed,
                valid=len(valid),
                duplicates=len(duplicates),
                errors=len(errors),
                new_employees=len(new_employees),
            ),
            processed_at=utc_now_iso(),
            memory_usage=memory_usage(),
        )
        return BatchOutcome(success=True, results=results, processed_at=results.processed_at, memory_usage=results.memory_usage)
    except Exception as exc:
        return BatchOutcome(
            success=False,
            error=str(exc),
            stack=traceback.format_exc(),
            processed_at=utc_now_iso(),
            memory_usage=memory_usage(),
        )


def handle_payload(payload: Any) -> BatchOutcome:
    """Validate a dispatch message, then process it."""
    rows = getattr(payload, "rows", None)
    directory = getattr(payload, "directory", None)
    if (
        not isinstance(payload, BatchPayload)
        or not isinstance(rows, (list, tuple))
        or not isinstance(directory, EmployeeDirectory)
    ):
        return BatchOutcome(
            success=False,
            error="Invalid data received: batch and directory are required",
            processed_at=utc_now_iso(),
            memory_usage=memory_usage(),
        )

    classifier = RecordClassifier(
        resolver=IdentityResolver(threshold=payload.threshold, max_suggestions=payload.max_suggestions)
    )
    return process_batch(rows, directory, classifier=classifier, start_index=payload.start_index)


def worker_main(conn, payload: Any) -> None:
    """Entry point of a worker process: one payload in, one outcome out."""
    try:
        conn.send(handle_payload(payload))
    finally:
        conn.close()

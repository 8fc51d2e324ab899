from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from .model import ProcessedRecord


@dataclass(frozen=True)
class StoreResult:
    inserted: int = 0
    duplicates: tuple[ProcessedRecord, ...] = ()
    skipped: tuple[ProcessedRecord, ...] = ()

    def to_dict(self) -> dict:
        return {
            "inserted": self.inserted,
            "duplicates": [r.index for r in self.duplicates],
            "skipped": [r.index for r in self.skipped],
        }


class AttendanceRecordSink(Protocol):
    """Nơi lưu bản ghi chấm công hợp lệ sau khi nhập.

    The sink owns the durable duplicate check: a record already stored for the
    same employee and date is reported back instead of inserted. Records with
    no resolved employee are skipped.
    """

    def store(self, records: Sequence[ProcessedRecord]) -> StoreResult:
        raise NotImplementedError

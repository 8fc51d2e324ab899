from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.enums import ErrorType, SuggestionReason
from ..employees.model import Employee


@dataclass(frozen=True)
class RecordError:
    """Lỗi có cấu trúc gắn với một dòng dữ liệu nhập."""

    type: ErrorType
    message: str
    field: Optional[str] = None
    value: Any = None
    stack: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"type": self.type.value, "message": self.message}
        if self.field is not None:
            out["field"] = self.field
        if self.value is not None:
            out["value"] = self.value
        if self.stack is not None:
            out["stack"] = self.stack
        return out


@dataclass(frozen=True)
class Suggestion:
    employee: Employee
    similarity: float
    reason: SuggestionReason = SuggestionReason.NAME_SIMILARITY

    def to_dict(self) -> dict:
        return {
            "employee": self.employee.to_dict(),
            "similarity": round(self.similarity, 4),
            "reason": self.reason.value,
        }


@dataclass(frozen=True)
class ResolutionResult:
    found: bool
    employee: Optional[Employee] = None
    suggestions: tuple[Suggestion, ...] = ()
    matched_by: Optional[str] = None

    @classmethod
    def matched(cls, employee: Employee, matched_by: Optional[str] = None) -> "ResolutionResult":
        return cls(found=True, employee=employee, matched_by=matched_by)

    @classmethod
    def unmatched(cls, suggestions) -> "ResolutionResult":
        return cls(found=False, suggestions=tuple(suggestions))


@dataclass(frozen=True)
class ProcessedRecord:
    """Kết quả phân loại của một dòng; tạo một lần, không sửa đổi sau đó."""

    original_row: Any
    index: int
    is_valid: bool = False
    is_duplicate: bool = False
    is_new_employee: bool = False
    errors: tuple[RecordError, ...] = ()
    processed_data: Optional[dict] = None

    @property
    def employee_id(self) -> Optional[int]:
        if not self.processed_data:
            return None
        return self.processed_data.get("employeeId")

    def to_dict(self) -> dict:
        data = None
        if self.processed_data is not None:
            data = dict(self.processed_data)
            if "suggestedEmployee" in data:
                data["suggestedEmployee"] = [s.to_dict() for s in data["suggestedEmployee"]]
        return {
            "originalRow": self.original_row,
            "index": self.index,
            "isValid": self.is_valid,
            "isDuplicate": self.is_duplicate,
            "isNewEmployee": self.is_new_employee,
            "errors": [e.to_dict() for e in self.errors],
            "processedData": data,
        }


@dataclass(frozen=True)
class RowFailure:
    """A row whose processing raised inside the batch loop itself."""

    record: Any
    error: str
    index: int
    stack: Optional[str] = None

    def to_dict(self) -> dict:
        return {"record": self.record, "error": self.error, "index": self.index, "stack": self.stack}


@dataclass(frozen=True)
class BatchStats:
    processed: int = 0
    valid: int = 0
    duplicates: int = 0
    errors: int = 0
    new_employees: int = 0

    def __add__(self, other: "BatchStats") -> "BatchStats":
        return BatchStats(
            processed=self.processed + other.processed,
            valid=self.valid + other.valid,
            duplicates=self.duplicates + other.duplicates,
            errors=self.errors + other.errors,
            new_employees=self.new_employees + other.new_employees,
        )

    def to_dict(self) -> dict:
        return {
            "processed": self.processed,
            "valid": self.valid,
            "duplicates": self.duplicates,
            "errors": self.errors,
            "newEmployees": self.new_employees,
        }


@dataclass(frozen=True)
class BatchResult:
    valid_records: tuple[ProcessedRecord, ...] = ()
    duplicates: tuple[ProcessedRecord, ...] = ()
    new_employees: tuple[ProcessedRecord, ...] = ()
    errors: tuple = ()
    stats: BatchStats = field(default_factory=BatchStats)
    processed_at: Optional[str] = None
    memory_usage: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "validRecords": [r.to_dict() for r in self.valid_records],
            "duplicates": [r.to_dict() for r in self.duplicates],
            "newEmployees": [r.to_dict() for r in self.new_employees],
            "errors": [e.to_dict() for e in self.errors],
            "stats": self.stats.to_dict(),
            "processedAt": self.processed_at,
            "memoryUsage": self.memory_usage,
        }


@dataclass(frozen=True)
class BatchOutcome:
    """Message a worker sends back: either a result or a batch-level failure."""

    success: bool
    processed_at: str
    memory_usage: dict = field(default_factory=dict)
    results: Optional[BatchResult] = None
    error: Optional[str] = None
    stack: Optional[str] = None


@dataclass(frozen=True)
class FailedBatch:
    batch_index: int
    start_index: int
    row_count: int
    error: str

    def to_dict(self) -> dict:
        return {
            "batchIndex": self.batch_index,
            "startIndex": self.start_index,
            "rowCount": self.row_count,
            "error": self.error,
        }


@dataclass(frozen=True)
class ImportSummary:
    """Import-level aggregate over every batch of one job."""

    valid_records: tuple[ProcessedRecord, ...] = ()
    duplicates: tuple[ProcessedRecord, ...] = ()
    new_employees: tuple[ProcessedRecord, ...] = ()
    errors: tuple = ()
    stats: BatchStats = field(default_factory=BatchStats)
    failed_batches: tuple[FailedBatch, ...] = ()
    batch_count: int = 0
    total_rows: int = 0
    duration_seconds: float = 0.0
    memory_usage: tuple[dict, ...] = ()

    @property
    def success(self) -> bool:
        return not self.failed_batches

    def merge(self, result: BatchResult) -> "ImportSummary":
        return ImportSummary(
            valid_records=self.valid_records + result.valid_records,
            duplicates=self.duplicates + result.duplicates,
            new_employees=self.new_employees + result.new_employees,
            errors=self.errors + result.errors,
            stats=self.stats + result.stats,
            failed_batches=self.failed_batches,
            batch_count=self.batch_count + 1,
            total_rows=self.total_rows,
            duration_seconds=self.duration_seconds,
            memory_usage=self.memory_usage + (result.memory_usage,),
        )

    def with_failure(self, failure: FailedBatch) -> "ImportSummary":
        return ImportSummary(
            valid_records=self.valid_records,
            duplicates=self.duplicates,
            new_employees=self.new_employees,
            errors=self.errors,
            stats=self.stats,
            failed_batches=self.failed_batches + (failure,),
            batch_count=self.batch_count + 1,
            total_rows=self.total_rows,
            duration_seconds=self.duration_seconds,
            memory_usage=self.memory_usage,
        )

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "totalRows": self.total_rows,
            "batchCount": self.batch_count,
            "durationSeconds": round(self.duration_seconds, 3),
            "stats": self.stats.to_dict(),
            "validRecords": [r.to_dict() for r in self.valid_records],
            "duplicates": [r.to_dict() for r in self.duplicates],
            "newEmployees": [r.to_dict() for r in self.new_employees],
            "errors": [e.to_dict() for e in self.errors],
            "failedBatches": [f.to_dict() for f in self.failed_batches],
            "memoryUsage": list(self.memory_usage),
        }

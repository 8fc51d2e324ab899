from __future__ import annotations

from enum import Enum


class ErrorType(str, Enum):
    """Loại lỗi ở mức từng dòng dữ liệu nhập."""

    INVALID_RECORD_FORMAT = "invalid_record_format"
    MISSING_FIELD = "missing_field"
    INVALID_DATE = "invalid_date"
    PROCESSING_ERROR = "processing_error"


class EmployeeStatus(str, Enum):
    """Kết quả đối chiếu nhân viên của một dòng hợp lệ."""

    NEW = "new"
    EXISTING = "existing"


class SuggestionReason(str, Enum):
    NAME_SIMILARITY = "name_similarity"

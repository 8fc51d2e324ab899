from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..common.validators import require_positive_float, require_positive_int, require_ratio
from ..core.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_SUGGESTIONS,
    DEFAULT_POOL_SIZE,
    DEFAULT_SUGGESTION_THRESHOLD,
    DEFAULT_WORKER_TIMEOUT_SECONDS,
)


@dataclass(frozen=True)
class ImportSettings:
    batch_size: int = DEFAULT_BATCH_SIZE
    pool_size: int = DEFAULT_POOL_SIZE
    worker_timeout: float = DEFAULT_WORKER_TIMEOUT_SECONDS
    suggestion_threshold: float = DEFAULT_SUGGESTION_THRESHOLD
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS
    dedupe_within_import: bool = False

    def __post_init__(self):
        require_positive_int(self.batch_size, "IMPORT_BATCH_SIZE")
        require_positive_int(self.pool_size, "WORKER_POOL_SIZE")
        require_positive_float(self.worker_timeout, "WORKER_TIMEOUT_SECONDS")
        require_ratio(self.suggestion_threshold, "SUGGESTION_THRESHOLD")
        require_positive_int(self.max_suggestions, "MAX_SUGGESTIONS")

    @classmethod
    def from_settings(cls, settings: Any) -> "ImportSettings":
        """Build from a settings module (``config.development`` etc.)."""
        return cls(
            batch_size=int(getattr(settings, "IMPORT_BATCH_SIZE", DEFAULT_BATCH_SIZE)),
            pool_size=int(getattr(settings, "WORKER_POOL_SIZE", DEFAULT_POOL_SIZE)),
            worker_timeout=float(getattr(settings, "WORKER_TIMEOUT_SECONDS", DEFAULT_WORKER_TIMEOUT_SECONDS)),
            suggestion_threshold=float(getattr(settings, "SUGGESTION_THRESHOLD", DEFAULT_SUGGESTION_THRESHOLD)),
            max_suggestions=int(getattr(settings, "MAX_SUGGESTIONS", DEFAULT_MAX_SUGGESTIONS)),
            dedupe_within_import=bool(getattr(settings, "DEDUPE_WITHIN_IMPORT", False)),
        )

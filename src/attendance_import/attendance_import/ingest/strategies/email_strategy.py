from __future__ import annotations

from typing import Any, Mapping, Optional

from ...employees.model import Employee, EmployeeDirectory
from ..normalizer import EMAIL
from .base import MatchStrategy, lookup_key


class EmailStrategy(MatchStrategy):
    """Exact, case-insensitive match on email."""

    name = "email"

    def match(self, record: Mapping[str, Any], directory: EmployeeDirectory) -> Optional[Employee]:
        key = lookup_key(record.get(EMAIL))
        if key is None:
            return None
        return directory.by_email.get(key)

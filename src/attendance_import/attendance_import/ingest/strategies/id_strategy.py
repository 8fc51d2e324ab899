from __future__ import annotations

from typing import Any, Mapping, Optional

from ...employees.model import Employee, EmployeeDirectory
from ..normalizer import EMPLOYEE_ID
from .base import MatchStrategy, lookup_key


class EmployeeIdStrategy(MatchStrategy):
    """Exact match on the employee id."""

    name = "employee_id"

    def match(self, record: Mapping[str, Any], directory: EmployeeDirectory) -> Optional[Employee]:
        key = lookup_key(record.get(EMPLOYEE_ID))
        if key is None:
            return None
        return directory.by_id.get(key)

from __future__ import annotations

from typing import Any, Mapping, Optional

from ...employees.model import Employee, EmployeeDirectory
from ..normalizer import EMPLOYEE_NAME
from .base import MatchStrategy, lookup_key


class ShortNameStrategy(MatchStrategy):
    """Exact, case-insensitive match on the short (display) name."""

    name = "short_name"

    def match(self, record: Mapping[str, Any], directory: EmployeeDirectory) -> Optional[Employee]:
        key = lookup_key(record.get(EMPLOYEE_NAME))
        if key is None:
            return None
        return directory.by_short_name.get(key)


class FullNameStrategy(MatchStrategy):
    """Exact, case-insensitive match on "first last"."""

    name = "full_name"

    def match(self, record: Mapping[str, Any], directory: EmployeeDirectory) -> Optional[Employee]:
        key = lookup_key(record.get(EMPLOYEE_NAME))
        if key is None:
            return None
        return directory.by_full_name.get(key)

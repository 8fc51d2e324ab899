from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from ...employees.model import Employee, EmployeeDirectory


def lookup_key(value: Any) -> Optional[str]:
    """Lower-cased, trimmed text key; None when there is nothing to look up."""
    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None


class MatchStrategy(ABC):
    """Strategy Pattern: one exact way of finding a row's employee."""

    name: str = ""

    @abstractmethod
    def match(self, record: Mapping[str, Any], directory: EmployeeDirectory) -> Optional[Employee]:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): nhân viên đã có trong hệ thống.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    """

    employee_id: int
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None
    display_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name.strip(), self.last_name.strip()) if p)

    @property
    def name(self) -> str:
        """Name used for fuzzy matching: display name, else full name."""
        return (self.display_name or "").strip() or self.full_name

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "full_name": self.full_name,
            "email": self.email,
        }


@dataclass(frozen=True)
class EmployeeDirectory:
    """Point-in-time snapshot of known employees, indexed four ways.

    Keys: ``by_id`` uses the id as a string, the other three are lower-cased.
    The snapshot is built once per import and pickled into every worker; no
    code path mutates it after ``build``.
    """

    by_id: dict[str, Employee] = field(default_factory=dict)
    by_email: dict[str, Employee] = field(default_factory=dict)
    by_short_name: dict[str, Employee] = field(default_factory=dict)
    by_full_name: dict[str, Employee] = field(default_factory=dict)

    @classmethod
    def build(cls, employees: Iterable[Employee]) -> "EmployeeDirectory":
        by_id: dict[str, Employee] = {}
        by_email: dict[str, Employee] = {}
        by_short_name: dict[str, Employee] = {}
        by_full_name: dict[str, Employee] = {}

        for emp in employees:
            by_id[str(emp.employee_id)] = emp
            if emp.email and emp.email.strip():
                by_email[emp.email.strip().lower()] = emp
            if emp.display_name and emp.display_name.strip():
                by_short_name[emp.display_name.strip().lower()] = emp
            if emp.full_name:
                by_full_name[emp.full_name.lower()] = emp

        return cls(by_id=by_id, by_email=by_email, by_short_name=by_short_name, by_full_name=by_full_name)

    def employees(self) -> list[Employee]:
        """Distinct employees across all indexes, in id order."""
        seen: dict[int, Employee] = {}
        for index in (self.by_id, self.by_email, self.by_short_name, self.by_full_name):
            for emp in index.values():
                seen.setdefault(emp.employee_id, emp)
        return [seen[k] for k in sorted(seen)]

    def __len__(self) -> int:
        return len(self.employees())

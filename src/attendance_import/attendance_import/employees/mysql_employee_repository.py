from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Employee, EmployeeDirectory
from .repository import EmployeeDirectoryProvider


class MySQLEmployeeRepository(EmployeeDirectoryProvider):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> list[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, email, first_name, last_name, display_name
                FROM employees
                WHERE is_admin = 0 AND is_active = 1
                ORDER BY id
                """
            )
            rows = fetchall(cur)
            return [
                Employee(
                    employee_id=int(r["id"]),
                    first_name=(r.get("first_name") or "").strip(),
                    last_name=(r.get("last_name") or "").strip(),
                    email=(r.get("email") or "").strip() or None,
                    display_name=(r.get("display_name") or "").strip() or None,
                )
                for r in rows
            ]

    def get_directory(self) -> EmployeeDirectory:
        return EmployeeDirectory.build(self.list_active())

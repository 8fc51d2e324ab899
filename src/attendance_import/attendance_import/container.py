from __future__ import annotations

from dataclasses import dataclass

from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .ingest.mysql_attendance_sink import MySQLAttendanceSink
from .ingest.service import AttendanceImportService
from .ingest.settings import ImportSettings
from .workers.pool import WorkerPool


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_sink: MySQLAttendanceSink
    worker_pool: WorkerPool

    import_service: AttendanceImportService


def build_container(*, db_config: dict, settings: ImportSettings | None = None) -> Container:
    settings = settings or ImportSettings()
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_sink = MySQLAttendanceSink(conn)
    worker_pool = WorkerPool(settings.pool_size, timeout=settings.worker_timeout)

    import_service = AttendanceImportService(
        worker_pool,
        employees_repo,
        attendance_sink,
        settings=settings,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_sink=attendance_sink,
        worker_pool=worker_pool,
        import_service=import_service,
    )

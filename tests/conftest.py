from __future__ import annotations

import multiprocessing

import pytest

from src.attendance_import.attendance_import.employees.model import Employee, EmployeeDirectory


@pytest.fixture
def employees():
    return [
        Employee(employee_id=7, first_name="Jane", last_name="Doe", email="Jane.Doe@Example.com"),
        Employee(employee_id=8, first_name="Jane Mary", last_name="Doe Smith"),
        Employee(employee_id=9, first_name="Robert", last_name="Brown", display_name="Bob"),
    ]


@pytest.fixture
def directory(employees):
    return EmployeeDirectory.build(employees)


@pytest.fixture
def fork_start_method():
    """Workers defined inside test modules are only reachable through fork."""
    if "fork" not in multiprocessing.get_all_start_methods():
        pytest.skip("fork start method not available")
    return "fork"

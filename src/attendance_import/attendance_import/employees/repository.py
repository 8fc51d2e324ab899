from __future__ import annotations

from typing import Protocol

from .model import EmployeeDirectory


class EmployeeDirectoryProvider(Protocol):
    """Giao diện cung cấp danh bạ nhân viên cho pipeline nhập dữ liệu.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def get_directory(self) -> EmployeeDirectory:
        raise NotImplementedError

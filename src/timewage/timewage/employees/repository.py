from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Employee directory.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_employees(self, *, department_id: Optional[int] = None) -> Sequence[Employee]:
        raise NotImplementedError

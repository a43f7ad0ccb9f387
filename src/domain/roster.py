"""
Roster Module

Explicit, caller-owned roster state: employees plus their KPI achievements.
The bonus engine only ever reads from it.
"""

import math
import uuid
from typing import Dict, Iterable, List, Optional

from .entities import Employee, EmployeePerformance, EmployeeRole, KPIType
from .exceptions import InvalidInputError


def default_employees() -> List[Employee]:
    """Example roster used when nothing has been saved yet."""
    return [
        Employee(id="1", name="Exemplo Gerente", base_salary=18742.00, role=EmployeeRole.GERENTE),
        Employee(id="2", name="Exemplo Equipe", base_salary=5000.00, role=EmployeeRole.EQUIPE),
    ]


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


class Roster:
    """
    Employees and their performance, in insertion order.

    Validation happens here, at the edge: the engine downstream assumes a
    non-negative salary and finite achievements.
    """

    def __init__(
        self,
        employees: Optional[Iterable[Employee]] = None,
        performance: Optional[Dict[str, EmployeePerformance]] = None
    ):
        self._employees: List[Employee] = list(employees or [])
        self._performance: Dict[str, EmployeePerformance] = {
            emp_id: dict(perf) for emp_id, perf in (performance or {}).items()
        }

    @classmethod
    def with_defaults(cls) -> "Roster":
        return cls(default_employees())

    @property
    def employees(self) -> List[Employee]:
        """Copy of the employee list."""
        return list(self._employees)

    @property
    def performance(self) -> Dict[str, EmployeePerformance]:
        """Copy of all performance maps keyed by employee id."""
        return {emp_id: dict(perf) for emp_id, perf in self._performance.items()}

    def __len__(self) -> int:
        return len(self._employees)

    def get(self, employee_id: str) -> Optional[Employee]:
        """Find an employee by id."""
        for employee in self._employees:
            if employee.id == employee_id:
                return employee
        return None

    def performance_for(self, employee_id: str) -> EmployeePerformance:
        """Copy of one employee's KPI achievements (empty if none)."""
        return dict(self._performance.get(employee_id, {}))

    def add_employee(
        self,
        name: str,
        base_salary: float,
        role: EmployeeRole = EmployeeRole.EQUIPE,
        employee_id: Optional[str] = None
    ) -> Employee:
        """
        Add a new employee.

        Raises:
            InvalidInputError: On empty name, negative/non-finite salary or
                an id that is already taken
        """
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("name", name, "O nome do colaborador é obrigatório")
        if not math.isfinite(base_salary) or base_salary < 0:
            raise InvalidInputError("base_salary", base_salary)

        employee_id = employee_id or _new_id()
        if self.get(employee_id) is not None:
            raise InvalidInputError("id", employee_id, f"Id já existente: {employee_id}")

        employee = Employee(id=employee_id, name=name, base_salary=float(base_salary), role=role)
        self._employees.append(employee)
        return employee

    def extend(self, employees: Iterable[Employee]) -> int:
        """
        Append already-built employees (e.g. from an import).

        Ids that collide with existing ones are regenerated.

        Returns:
            Number of employees added
        """
        added = 0
        for employee in employees:
            self.add_employee(
                employee.name,
                employee.base_salary,
                employee.role,
                employee_id=None if self.get(employee.id) else employee.id
            )
            added += 1
        return added

    def remove_employee(self, employee_id: str) -> bool:
        """
        Remove an employee and their performance.

        Returns:
            True if someone was removed
        """
        before = len(self._employees)
        self._employees = [e for e in self._employees if e.id != employee_id]
        self._performance.pop(employee_id, None)
        return len(self._employees) != before

    def set_achievement(self, employee_id: str, kpi_type: KPIType, value: float) -> None:
        """
        Record the achievement percentage for one KPI.

        Raises:
            InvalidInputError: Unknown employee or non-finite value
        """
        if self.get(employee_id) is None:
            raise InvalidInputError("id", employee_id, f"Colaborador não encontrado: {employee_id}")
        if not math.isfinite(value):
            raise InvalidInputError("achievement", value)
        self._performance.setdefault(employee_id, {})[kpi_type] = float(value)

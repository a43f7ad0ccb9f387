"""
Roster Store Module

JSON persistence for the roster: employees and their KPI achievements.
"""

import json
import os
from pathlib import Path
from typing import Dict

from domain.entities import Employee, EmployeePerformance, EmployeeRole, KPIType
from domain.roster import Roster
from infrastructure.logger import get_logger

logger = get_logger("RosterStore")


class RosterStore:
    """
    Loads and saves a Roster as a single JSON document:

        {"employees": [{"id", "name", "baseSalary", "role"}, ...],
         "performance": {"<id>": {"MONTHLY_BSC": 95.0, ...}, ...}}
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Roster:
        """
        Load the roster. A missing or unreadable file yields the example roster.
        """
        if not self.path.exists():
            return Roster.with_defaults()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Falha ao carregar {self.path}, usando dados de exemplo: {e}")
            return Roster.with_defaults()

        if not isinstance(data, dict):
            logger.warning(f"Formato inesperado em {self.path}, usando dados de exemplo")
            return Roster.with_defaults()

        raw_employees = data.get("employees", [])
        if not isinstance(raw_employees, list):
            logger.warning(f"Lista de colaboradores inválida em {self.path}, usando dados de exemplo")
            return Roster.with_defaults()

        employees = []
        for raw in raw_employees:
            employee = self._employee_from_dict(raw)
            if employee is not None:
                employees.append(employee)

        raw_performance = data.get("performance") or {}
        if not isinstance(raw_performance, dict):
            logger.warning(f"Indicadores inválidos em {self.path} foram ignorados")
            raw_performance = {}

        performance: Dict[str, EmployeePerformance] = {}
        for emp_id, raw_perf in raw_performance.items():
            performance[emp_id] = self._performance_from_dict(emp_id, raw_perf)

        return Roster(employees, performance)

    def save(self, roster: Roster) -> None:
        """Write the roster atomically (temp file, then replace)."""
        data = {
            "employees": [self._employee_to_dict(e) for e in roster.employees],
            "performance": {
                emp_id: {k.value: v for k, v in perf.items()}
                for emp_id, perf in roster.performance.items()
            },
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp, self.path)
        logger.debug(f"Cadastro salvo: {self.path} ({len(roster)} colaboradores)")

    @staticmethod
    def _employee_to_dict(employee: Employee) -> dict:
        return {
            "id": employee.id,
            "name": employee.name,
            "baseSalary": employee.base_salary,
            "role": employee.role.value,
        }

    @staticmethod
    def _employee_from_dict(raw: dict):
        try:
            return Employee(
                id=str(raw["id"]),
                name=str(raw["name"]),
                base_salary=float(raw["baseSalary"]),
                role=EmployeeRole(raw.get("role", EmployeeRole.EQUIPE.value)),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Colaborador ignorado no arquivo salvo: {raw!r} ({e})")
            return None

    @staticmethod
    def _performance_from_dict(emp_id: str, raw: dict) -> EmployeePerformance:
        performance: EmployeePerformance = {}
        if not isinstance(raw, dict):
            return performance
        for key, value in raw.items():
            try:
                performance[KPIType(key)] = float(value)
            except (TypeError, ValueError):
                logger.warning(f"Indicador ignorado para {emp_id}: {key}={value!r}")
        return performance

"""
Bonus Calculator Module

Resolves KPI achievement into bonus percentages and monetary bonus values.
"""

import math
from typing import Iterable, List, Optional, Sequence

from .bracket_tables import BracketTableRepository
from .entities import (
    CalculationResult, Employee, EmployeeBonusSummary, EmployeePerformance,
    EmployeeRole, KPIType, PrizeBracket
)
from infrastructure.logger import get_logger

logger = get_logger("BonusCalculator")


def resolve_from_table(brackets: Sequence[PrizeBracket], achievement: float) -> float:
    """
    Step-function lookup over an ascending bracket table.

    The highest bracket whose threshold is <= achievement wins; on equal
    thresholds the later bracket wins. Below the first threshold the
    result is 0.

    Args:
        brackets: Brackets sorted ascending by attaining
        achievement: Achievement percentage (already clamped)

    Returns:
        Bonus percentage of base salary
    """
    percentage = 0.0
    for bracket in brackets:
        if bracket.attaining > achievement:
            break
        percentage = bracket.base_percentage
    return percentage


class BonusCalculator:
    """
    Stateless bonus engine.

    Provides:
    - Achievement -> bonus percentage resolution per (KPI, role)
    - Bonus percentage -> monetary value
    - Per-employee calculation across every KPIType, in enumeration order

    Values are never rounded here; rounding belongs to presentation/export.
    Out-of-range numbers are clamped instead of rejected: negative or NaN
    achievement counts as 0 and a negative or non-finite salary counts as 0.
    """

    def __init__(self, repository: Optional[BracketTableRepository] = None):
        """
        Initialize calculator.

        Args:
            repository: Bracket tables to use (defaults to the shipped tables)
        """
        self.repository = repository or BracketTableRepository()

    @staticmethod
    def _clamp_achievement(achievement: float) -> float:
        if achievement is None:
            return 0.0
        if math.isnan(achievement) or achievement < 0:
            logger.warning(f"Atingimento inválido {achievement!r} tratado como 0")
            return 0.0
        return achievement

    @staticmethod
    def _clamp_salary(base_salary: float) -> float:
        if not math.isfinite(base_salary) or base_salary < 0:
            logger.warning(f"Salário base inválido {base_salary!r} tratado como 0")
            return 0.0
        return base_salary

    def resolve_bonus_percentage(
        self,
        kpi_type: KPIType,
        achievement: float,
        role: EmployeeRole
    ) -> float:
        """
        Resolve an achievement percentage to a bonus percentage.

        Args:
            kpi_type: KPI being evaluated
            achievement: Achievement percentage (100 = target met)
            role: Employee role selecting the bracket table

        Returns:
            Bonus percentage (0 below the lowest threshold)

        Raises:
            ConfigurationError: If no table exists for the pair
        """
        table = self.repository.table_for(kpi_type, role)
        return resolve_from_table(table, self._clamp_achievement(achievement))

    def bonus_value(self, base_salary: float, bonus_percentage: float) -> float:
        """
        Monetary bonus for a salary and percentage, unrounded.

        Returns:
            base_salary * bonus_percentage / 100
        """
        return self._clamp_salary(base_salary) * bonus_percentage / 100

    def calculate(
        self,
        employee: Employee,
        kpi_type: KPIType,
        achievement: float
    ) -> CalculationResult:
        """Calculate the result for a single KPI."""
        percentage = self.resolve_bonus_percentage(kpi_type, achievement, employee.role)
        return CalculationResult(
            kpi_type=kpi_type,
            achievement=achievement,
            bonus_percentage=percentage,
            bonus_value=self.bonus_value(employee.base_salary, percentage)
        )

    def calculate_all(
        self,
        employee: Employee,
        performance: Optional[EmployeePerformance] = None
    ) -> List[CalculationResult]:
        """
        Calculate one result per KPIType, in enumeration order.

        Args:
            employee: The employee
            performance: KPI -> achievement; missing KPIs count as 0

        Returns:
            List of CalculationResult, one per KPIType
        """
        performance = performance or {}
        return [
            self.calculate(employee, kpi_type, performance.get(kpi_type, 0.0))
            for kpi_type in KPIType
        ]

    def calculate_summary(
        self,
        employee: Employee,
        performance: Optional[EmployeePerformance] = None
    ) -> EmployeeBonusSummary:
        """Calculate all KPIs and wrap them with the employee."""
        results = self.calculate_all(employee, performance)
        summary = EmployeeBonusSummary(employee=employee, results=results)
        logger.debug(f"{employee.name}: total {summary.total!r}")
        return summary

    @staticmethod
    def total_bonus(results: Iterable[CalculationResult]) -> float:
        """Sum bonus values with no intermediate rounding."""
        return sum(r.bonus_value for r in results)

"""
Domain Entities Module

Core value objects for the KPI bonus calculator.
These entities are independent of storage, import and presentation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class KPIType(str, Enum):
    """
    Bonus category. Declaration order is the report column order.
    """
    MONTHLY_BSC = "MONTHLY_BSC"                  # BSC mensal
    QUARTERLY_GERENCIAL = "QUARTERLY_GERENCIAL"  # Gerencial trimestral
    MONTHLY_MAT = "MONTHLY_MAT"                  # MAT mensal
    QUARTERLY_SPECIAL = "QUARTERLY_SPECIAL"      # Especial trimestral

    @property
    def label(self) -> str:
        """Human readable label."""
        return KPI_LABELS[self]

    @property
    def short_name(self) -> str:
        """Column title used by the consolidated report (e.g. "BSC")."""
        return self.value.split("_")[1]


KPI_LABELS: Dict[KPIType, str] = {
    KPIType.MONTHLY_BSC: "BSC Mensal",
    KPIType.QUARTERLY_GERENCIAL: "Gerencial Trimestral",
    KPIType.MONTHLY_MAT: "MAT Mensal",
    KPIType.QUARTERLY_SPECIAL: "Especial Trimestral",
}


class EmployeeRole(str, Enum):
    """Selects which bracket table applies."""
    GERENTE = "GERENTE"  # manager tier
    EQUIPE = "EQUIPE"    # team tier

    @classmethod
    def from_text(cls, text: str) -> "EmployeeRole":
        """
        Match a role name case-insensitively.

        Anything other than "gerente" falls back to EQUIPE, which is how
        imported rosters without a role column are treated.
        """
        if text and text.strip().upper() == cls.GERENTE.value:
            return cls.GERENTE
        return cls.EQUIPE


@dataclass(frozen=True)
class PrizeBracket:
    """
    One step of a bracket table.

    Attributes:
        attaining: Minimum achievement percentage (inclusive)
        base_percentage: Bonus percentage of base salary earned from there on
    """
    attaining: float
    base_percentage: float


@dataclass(frozen=True)
class Employee:
    """
    An employee as owned by the roster.

    Attributes:
        id: Stable identifier
        name: Display name
        base_salary: Non-negative monthly base salary
        role: Tier used for bracket selection
    """
    id: str
    name: str
    base_salary: float
    role: EmployeeRole


# KPI -> achievement percentage. A missing key means "not measured yet".
EmployeePerformance = Dict[KPIType, float]


@dataclass(frozen=True)
class CalculationResult:
    """Engine output for one KPI."""
    kpi_type: KPIType
    achievement: float
    bonus_percentage: float
    bonus_value: float


@dataclass
class EmployeeBonusSummary:
    """
    All KPI results for one employee, in KPIType order.

    Attributes:
        employee: The employee the results belong to
        results: One CalculationResult per KPIType
    """
    employee: Employee
    results: List[CalculationResult] = field(default_factory=list)

    @property
    def total(self) -> float:
        """Literal sum of the unrounded per-KPI bonus values."""
        return sum(r.bonus_value for r in self.results)

    def value_for(self, kpi_type: KPIType) -> float:
        """Bonus value for a single KPI (0.0 if absent)."""
        for result in self.results:
            if result.kpi_type == kpi_type:
                return result.bonus_value
        return 0.0

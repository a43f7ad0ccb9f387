"""
Unit tests for the bonus engine.
"""

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.bonus_calculator import BonusCalculator, resolve_from_table
from domain.bracket_tables import BracketTableRepository
from domain.entities import (
    CalculationResult, Employee, EmployeeRole, KPIType, PrizeBracket
)


@pytest.fixture
def calculator():
    return BonusCalculator()


@pytest.fixture
def team_member():
    return Employee(id="2", name="Exemplo Equipe", base_salary=5000.00, role=EmployeeRole.EQUIPE)


@pytest.fixture
def manager():
    return Employee(id="1", name="Exemplo Gerente", base_salary=18742.00, role=EmployeeRole.GERENTE)


class TestResolveFromTable:
    """Tests for the step-function lookup."""

    TABLE = (PrizeBracket(80, 4), PrizeBracket(100, 8), PrizeBracket(120, 12))

    def test_below_floor_is_zero(self):
        assert resolve_from_table(self.TABLE, 79.99) == 0

    def test_threshold_is_inclusive(self):
        assert resolve_from_table(self.TABLE, 80) == 4
        assert resolve_from_table(self.TABLE, 100) == 8
        assert resolve_from_table(self.TABLE, 120) == 12

    def test_between_thresholds_uses_lower_bracket(self):
        assert resolve_from_table(self.TABLE, 119.99) == 8

    def test_unbounded_above(self):
        assert resolve_from_table(self.TABLE, 250) == 12
        assert resolve_from_table(self.TABLE, float("inf")) == 12

    def test_later_duplicate_wins(self):
        table = (PrizeBracket(80, 4), PrizeBracket(80, 5))
        assert resolve_from_table(table, 80) == 5


class TestResolveBonusPercentage:
    """Tests for per-(KPI, role) resolution."""

    def test_example_team_bsc_at_target(self, calculator):
        assert calculator.resolve_bonus_percentage(
            KPIType.MONTHLY_BSC, 100, EmployeeRole.EQUIPE) == 8

    def test_every_threshold_is_left_continuous(self, calculator):
        repo = calculator.repository
        for kpi_type, role, table in repo.items():
            for bracket in table:
                assert calculator.resolve_bonus_percentage(
                    kpi_type, bracket.attaining, role) == bracket.base_percentage

    def test_just_below_threshold_differs(self, calculator):
        """0.01 below a threshold lands in the previous bracket."""
        for kpi_type, role, table in calculator.repository.items():
            for bracket in table:
                below = calculator.resolve_bonus_percentage(kpi_type, bracket.attaining - 0.01, role)
                assert below != bracket.base_percentage

    def test_monotonic_in_achievement(self, calculator):
        for kpi_type in KPIType:
            for role in EmployeeRole:
                previous = 0.0
                for step in range(0, 2001):
                    value = calculator.resolve_bonus_percentage(kpi_type, step / 10, role)
                    assert value >= previous
                    previous = value

    def test_zero_and_negative_resolve_to_zero(self, calculator):
        for kpi_type in KPIType:
            for role in EmployeeRole:
                assert calculator.resolve_bonus_percentage(kpi_type, 0, role) == 0
                assert calculator.resolve_bonus_percentage(kpi_type, -50, role) == 0

    def test_nan_is_treated_as_zero(self, calculator):
        assert calculator.resolve_bonus_percentage(
            KPIType.MONTHLY_BSC, float("nan"), EmployeeRole.EQUIPE) == 0

    def test_role_separation(self, calculator):
        manager_pct = calculator.resolve_bonus_percentage(KPIType.MONTHLY_BSC, 100, EmployeeRole.GERENTE)
        team_pct = calculator.resolve_bonus_percentage(KPIType.MONTHLY_BSC, 100, EmployeeRole.EQUIPE)
        assert manager_pct != team_pct

    def test_uses_injected_repository(self):
        tables = {k: {r: (PrizeBracket(10, 1),) for r in EmployeeRole} for k in KPIType}
        calculator = BonusCalculator(BracketTableRepository(tables))
        assert calculator.resolve_bonus_percentage(KPIType.QUARTERLY_SPECIAL, 10, EmployeeRole.GERENTE) == 1


class TestBonusValue:
    """Tests for percentage -> money."""

    def test_basic_value(self, calculator):
        assert calculator.bonus_value(5000.00, 8) == 400.00

    def test_not_rounded(self, calculator):
        assert calculator.bonus_value(1234.567, 3) == 1234.567 * 3 / 100

    def test_negative_salary_clamped(self, calculator):
        assert calculator.bonus_value(-1000, 8) == 0

    def test_non_finite_salary_clamped(self, calculator):
        assert calculator.bonus_value(float("nan"), 8) == 0
        assert calculator.bonus_value(float("inf"), 8) == 0


class TestCalculateAll:
    """Tests for per-employee calculation."""

    def test_example_scenario(self, calculator, team_member):
        results = calculator.calculate_all(team_member, {KPIType.MONTHLY_BSC: 100})
        bsc = results[0]
        assert bsc.kpi_type == KPIType.MONTHLY_BSC
        assert bsc.bonus_percentage == 8
        assert bsc.bonus_value == 400.00

    def test_one_result_per_kpi_in_order(self, calculator, team_member):
        results = calculator.calculate_all(team_member, {})
        assert [r.kpi_type for r in results] == list(KPIType)

    def test_missing_kpi_yields_zero(self, calculator, team_member):
        results = calculator.calculate_all(team_member, {KPIType.MONTHLY_BSC: 100})
        mat = results[2]
        assert mat.kpi_type == KPIType.MONTHLY_MAT
        assert mat.achievement == 0
        assert mat.bonus_percentage == 0
        assert mat.bonus_value == 0

    def test_none_performance(self, calculator, manager):
        assert all(r.bonus_value == 0 for r in calculator.calculate_all(manager, None))

    def test_deterministic(self, calculator, manager):
        performance = {
            KPIType.MONTHLY_BSC: 104.5,
            KPIType.QUARTERLY_GERENCIAL: 87,
            KPIType.MONTHLY_MAT: 121,
            KPIType.QUARTERLY_SPECIAL: 99.99,
        }
        assert calculator.calculate_all(manager, performance) == \
            calculator.calculate_all(manager, performance)

    def test_does_not_mutate_performance(self, calculator, manager):
        performance = {KPIType.MONTHLY_BSC: 110}
        calculator.calculate_all(manager, performance)
        assert performance == {KPIType.MONTHLY_BSC: 110}

    def test_aggregation_identity(self, calculator, manager):
        performance = {
            KPIType.MONTHLY_BSC: 112,
            KPIType.QUARTERLY_GERENCIAL: 101,
            KPIType.MONTHLY_MAT: 86,
            KPIType.QUARTERLY_SPECIAL: 140,
        }
        results = calculator.calculate_all(manager, performance)
        total = calculator.total_bonus(results)
        expected = manager.base_salary * sum(r.bonus_percentage for r in results) / 100
        assert total == pytest.approx(expected)

    def test_summary_total_is_literal_sum(self, calculator, manager):
        performance = {KPIType.MONTHLY_BSC: 95, KPIType.MONTHLY_MAT: 100}
        summary = calculator.calculate_summary(manager, performance)

        literal = 0
        for result in summary.results:
            literal += result.bonus_value
        assert summary.total == literal
        assert summary.value_for(KPIType.MONTHLY_MAT) == 18742.00 * 7 / 100

    def test_calculate_single_kpi(self, calculator, manager):
        result = calculator.calculate(manager, KPIType.QUARTERLY_SPECIAL, 130)
        assert result == CalculationResult(
            kpi_type=KPIType.QUARTERLY_SPECIAL,
            achievement=130,
            bonus_percentage=20,
            bonus_value=18742.00 * 20 / 100
        )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Unit tests for Roster state and summary sorting.
"""

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import (
    CalculationResult, Employee, EmployeeBonusSummary, EmployeeRole, KPIType
)
from domain.exceptions import InvalidInputError
from domain.roster import Roster, default_employees
from domain.sorting import sort_summaries


class TestRoster:
    """Tests for roster maintenance."""

    def test_defaults(self):
        roster = Roster.with_defaults()
        names = [e.name for e in roster.employees]
        assert names == ["Exemplo Gerente", "Exemplo Equipe"]
        assert roster.get("1").role == EmployeeRole.GERENTE
        assert roster.get("1").base_salary == 18742.00

    def test_add_employee_generates_id(self):
        roster = Roster()
        employee = roster.add_employee("Ana", 3500, EmployeeRole.EQUIPE)
        assert employee.id
        assert roster.get(employee.id) == employee

    def test_add_employee_strips_name(self):
        employee = Roster().add_employee("  Bruno  ", 4000)
        assert employee.name == "Bruno"
        assert employee.role == EmployeeRole.EQUIPE

    @pytest.mark.parametrize("salary", [-1, float("nan"), float("inf")])
    def test_add_employee_rejects_bad_salary(self, salary):
        with pytest.raises(InvalidInputError):
            Roster().add_employee("Ana", salary)

    def test_add_employee_rejects_empty_name(self):
        with pytest.raises(InvalidInputError):
            Roster().add_employee("   ", 1000)

    def test_add_employee_rejects_duplicate_id(self):
        roster = Roster.with_defaults()
        with pytest.raises(InvalidInputError):
            roster.add_employee("Outro", 1000, employee_id="1")

    def test_extend_regenerates_colliding_ids(self):
        roster = Roster.with_defaults()
        added = roster.extend([Employee("1", "Carla", 2000, EmployeeRole.EQUIPE)])
        assert added == 1
        assert len(roster) == 3
        carla = [e for e in roster.employees if e.name == "Carla"][0]
        assert carla.id != "1"

    def test_remove_employee_drops_performance(self):
        roster = Roster.with_defaults()
        roster.set_achievement("2", KPIType.MONTHLY_BSC, 100)
        assert roster.remove_employee("2") is True
        assert roster.get("2") is None
        assert roster.performance_for("2") == {}

    def test_remove_unknown_employee(self):
        assert Roster.with_defaults().remove_employee("nope") is False

    def test_set_achievement(self):
        roster = Roster.with_defaults()
        roster.set_achievement("1", KPIType.QUARTERLY_GERENCIAL, 97.5)
        assert roster.performance_for("1") == {KPIType.QUARTERLY_GERENCIAL: 97.5}

    def test_set_achievement_rejects_unknown_employee(self):
        with pytest.raises(InvalidInputError):
            Roster().set_achievement("x", KPIType.MONTHLY_BSC, 100)

    def test_set_achievement_rejects_nan(self):
        with pytest.raises(InvalidInputError):
            Roster.with_defaults().set_achievement("1", KPIType.MONTHLY_BSC, float("nan"))

    def test_performance_for_returns_copy(self):
        roster = Roster.with_defaults()
        roster.set_achievement("1", KPIType.MONTHLY_BSC, 100)
        copy = roster.performance_for("1")
        copy[KPIType.MONTHLY_BSC] = 0
        assert roster.performance_for("1")[KPIType.MONTHLY_BSC] == 100

    def test_default_employees_are_fresh(self):
        assert default_employees() == default_employees()
        assert default_employees() is not default_employees()


def _summary(name: str, total: float) -> EmployeeBonusSummary:
    employee = Employee(id=name, name=name, base_salary=1000, role=EmployeeRole.EQUIPE)
    result = CalculationResult(KPIType.MONTHLY_BSC, 100, total / 10, total)
    return EmployeeBonusSummary(employee=employee, results=[result])


class TestSortSummaries:
    """Tests for report ordering."""

    def test_sort_by_total_descending(self):
        summaries = [_summary("a", 10), _summary("b", 30), _summary("c", 20)]
        ordered = sort_summaries(summaries, "total")
        assert [s.employee.name for s in ordered] == ["b", "c", "a"]

    def test_sort_by_name_ignores_case(self):
        summaries = [_summary("carla", 1), _summary("Ana", 1), _summary("bruno", 1)]
        ordered = sort_summaries(summaries, "name")
        assert [s.employee.name for s in ordered] == ["Ana", "bruno", "carla"]

    def test_roster_order_is_kept(self):
        summaries = [_summary("z", 1), _summary("a", 5)]
        ordered = sort_summaries(summaries, "roster")
        assert [s.employee.name for s in ordered] == ["z", "a"]
        assert ordered is not summaries

    def test_default_is_roster_order(self):
        summaries = [_summary("z", 1), _summary("a", 5), _summary("m", 3)]
        assert [s.employee.name for s in sort_summaries(summaries)] == ["z", "a", "m"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""
Unit tests for RosterParser (CSV text and Excel imports).
"""

import tempfile
from pathlib import Path

import pytest
from openpyxl import Workbook

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import EmployeeRole
from infrastructure.roster_parser import RosterFormatError, RosterParser


class TestParseText:
    """Tests for delimited text imports."""

    def test_semicolon_lines(self):
        text = "Nome;Salario;Perfil\nAna;R$ 5.000,00;Equipe\nCarlos;18.742,00;gerente\n"
        result = RosterParser().parse_text(text)

        assert result.imported_count == 2
        ana, carlos = result.employees
        assert ana.name == "Ana"
        assert ana.base_salary == 5000.0
        assert ana.role == EmployeeRole.EQUIPE
        assert carlos.base_salary == 18742.0
        assert carlos.role == EmployeeRole.GERENTE

    def test_header_line_is_skipped(self):
        result = RosterParser().parse_text("nome;salario\nAna;1000")
        assert [e.name for e in result.employees] == ["Ana"]
        assert result.skipped == [1]

    def test_comma_delimiter(self):
        result = RosterParser().parse_text("Bruno,3500.50,GERENTE")
        assert result.employees[0].base_salary == 3500.5
        assert result.employees[0].role == EmployeeRole.GERENTE

    def test_missing_role_defaults_to_team(self):
        result = RosterParser().parse_text("Ana;2000")
        assert result.employees[0].role == EmployeeRole.EQUIPE

    def test_bad_lines_are_reported(self):
        text = "Ana;abc\nSomente nome\n;1000\nBia;-5\nCaio;1500"
        result = RosterParser().parse_text(text)
        assert [e.name for e in result.employees] == ["Caio"]
        assert result.skipped == [1, 2, 3, 4]

    def test_blank_lines_are_ignored(self):
        result = RosterParser().parse_text("\nAna;1000\n\n")
        assert result.imported_count == 1
        assert result.skipped == []

    def test_generated_ids_are_unique(self):
        result = RosterParser().parse_text("Ana;1000\nAna;1000")
        ids = {e.id for e in result.employees}
        assert len(ids) == 2


class TestParseFile:
    """Tests for file imports."""

    def test_csv_file_with_bom(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "equipe.csv"
            path.write_text("Nome;Salário\nJoão;R$ 4.200,00\n", encoding="utf-8-sig")
            result = RosterParser().parse_file(path)

        assert result.employees[0].name == "João"
        assert result.employees[0].base_salary == 4200.0

    def test_excel_file(self):
        wb = Workbook()
        ws = wb.active
        ws.append(["Nome", "Salário", "Perfil"])
        ws.append(["Marina", 7300.25, "Gerente"])
        ws.append(["Paulo", "2.500,00", None])
        ws.append([None, None, None])

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "equipe.xlsx"
            wb.save(path)
            result = RosterParser().parse_file(path)

        assert [(e.name, e.base_salary, e.role) for e in result.employees] == [
            ("Marina", 7300.25, EmployeeRole.GERENTE),
            ("Paulo", 2500.0, EmployeeRole.EQUIPE),
        ]
        assert result.skipped == [1]

    def test_missing_file(self):
        with pytest.raises(RosterFormatError):
            RosterParser().parse_file(Path("/nonexistent/roster.csv"))

    def test_corrupt_excel(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "broken.xlsx"
            path.write_bytes(b"not a zip file")
            with pytest.raises(RosterFormatError):
                RosterParser().parse_file(path)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

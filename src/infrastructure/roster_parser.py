"""
Roster Parser Module

Parses roster imports (delimited text or Excel) into Employee entities.
Normalizes Brazilian number formatting and role names before anything
reaches the bonus engine.
"""

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from openpyxl import load_workbook

from domain.entities import Employee, EmployeeRole
from domain.exceptions import BonusError
from infrastructure.logger import get_logger
from infrastructure.number_format import parse_locale_number

logger = get_logger("RosterParser")


# ==============================================================================
# Custom Exceptions
# ==============================================================================
class RosterFormatError(BonusError):
    """Raised when a roster file cannot be read at all."""
    pass


# ==============================================================================
# Data Classes
# ==============================================================================
@dataclass
class RosterImportResult:
    """Employees parsed from an import plus the lines that were dropped."""
    employees: List[Employee] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)  # 1-based line numbers

    @property
    def imported_count(self) -> int:
        return len(self.employees)


# ==============================================================================
# RosterParser Class
# ==============================================================================
class RosterParser:
    """
    Parses roster files with one employee per line: name, salary[, role].

    Handles:
    - ";" or "," as delimiter (";" wins when present on the line)
    - "R$ 18.742,00" style salaries
    - Header lines whose name column reads "nome"
    - Missing or unknown role, which defaults to EQUIPE
    """

    HEADER_NAME = "nome"
    EXCEL_SUFFIXES = (".xlsx", ".xlsm")

    def parse_file(self, file_path: Path) -> RosterImportResult:
        """
        Parse a roster file, picking the reader by file suffix.

        Raises:
            RosterFormatError: If the file is missing or unreadable
        """
        if not file_path.exists():
            raise RosterFormatError(f"Arquivo não encontrado: {file_path}")

        logger.info(f"Iniciando importação de colaboradores: {file_path.name}")

        if file_path.suffix.lower() in self.EXCEL_SUFFIXES:
            rows = self._read_excel_rows(file_path)
        else:
            try:
                text = file_path.read_text(encoding="utf-8-sig")
            except (OSError, UnicodeDecodeError) as e:
                raise RosterFormatError(f"Não foi possível ler {file_path}: {e}") from e
            rows = [self._split_line(line) for line in text.splitlines()]

        result = self.parse_rows(rows)
        logger.info(
            f"Importação concluída: {result.imported_count} colaboradores, "
            f"{len(result.skipped)} linhas ignoradas"
        )
        return result

    def parse_text(self, text: str) -> RosterImportResult:
        """Parse delimited text already in memory."""
        return self.parse_rows(self._split_line(line) for line in text.splitlines())

    def parse_rows(self, rows: Iterable[Sequence]) -> RosterImportResult:
        """
        Convert raw rows into employees.

        Args:
            rows: Sequences of cell values (str or numbers)

        Returns:
            RosterImportResult with parsed employees and skipped line numbers
        """
        result = RosterImportResult()

        for line_no, parts in enumerate(rows, start=1):
            employee = self._parse_row(parts)
            if employee is None:
                # Blank lines are not worth reporting
                if any(str(p).strip() for p in parts if p is not None):
                    result.skipped.append(line_no)
                    logger.debug(f"Linha {line_no} ignorada: {list(parts)}")
                continue
            result.employees.append(employee)

        return result

    # --------------------------------------------------------------------------
    # Internals
    # --------------------------------------------------------------------------
    @staticmethod
    def _split_line(line: str) -> List[str]:
        delimiter = ";" if ";" in line else ","
        return line.split(delimiter)

    def _parse_row(self, parts: Sequence) -> Optional[Employee]:
        if len(parts) < 2 or parts[0] is None or parts[1] is None:
            return None

        name = str(parts[0]).strip()
        if not name or name.lower() == self.HEADER_NAME:
            return None

        raw_salary = parts[1]
        if isinstance(raw_salary, (int, float)) and not isinstance(raw_salary, bool):
            salary = float(raw_salary)
        else:
            salary = parse_locale_number(str(raw_salary).strip())
        if salary is None or salary < 0:
            return None

        role_text = str(parts[2]) if len(parts) > 2 and parts[2] is not None else ""
        return Employee(
            id=uuid.uuid4().hex[:12],
            name=name,
            base_salary=salary,
            role=EmployeeRole.from_text(role_text),
        )

    def _read_excel_rows(self, file_path: Path) -> List[tuple]:
        try:
            wb = load_workbook(file_path, read_only=True, data_only=True)
        except Exception as e:
            raise RosterFormatError(f"Planilha inválida {file_path.name}: {e}") from e

        try:
            ws = wb.active
            return [tuple(row[:3]) for row in ws.iter_rows(values_only=True)]
        finally:
            wb.close()

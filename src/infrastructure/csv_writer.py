"""
CSV Writer Module

Writes the consolidated bonus report as delimited text.
"""

import csv
from pathlib import Path
from typing import List

from domain.entities import EmployeeBonusSummary, KPIType
from infrastructure.logger import get_logger
from infrastructure.number_format import format_export_amount

logger = get_logger("CsvReportWriter")


class CsvReportWriter:
    """
    Delimited export of bonus summaries.

    Columns: Colaborador, Perfil, Salario Base, one column per KPIType (in
    enumeration order) and Total Premiacao. Amounts always carry two
    decimals with "." as separator; totals are summed before rounding.
    """

    LEADING_COLUMNS = ["Colaborador", "Perfil", "Salario Base"]
    TOTAL_COLUMN = "Total Premiacao"

    def __init__(self, delimiter: str = ";", encoding: str = "utf-8-sig"):
        self.delimiter = delimiter
        self.encoding = encoding

    def header(self) -> List[str]:
        return self.LEADING_COLUMNS + [k.value for k in KPIType] + [self.TOTAL_COLUMN]

    def build_row(self, summary: EmployeeBonusSummary) -> List[str]:
        """Format a single employee line."""
        employee = summary.employee
        row = [
            employee.name,
            employee.role.value,
            format_export_amount(employee.base_salary),
        ]
        row.extend(format_export_amount(summary.value_for(k)) for k in KPIType)
        row.append(format_export_amount(summary.total))
        return row

    def write(self, summaries: List[EmployeeBonusSummary], output_path: Path) -> Path:
        """
        Write the report.

        Args:
            summaries: Rows to write, already sorted
            output_path: Destination file (parent dirs are created)

        Returns:
            Path to the created file
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding=self.encoding, newline="") as f:
            writer = csv.writer(f, delimiter=self.delimiter, lineterminator="\n")
            writer.writerow(self.header())
            for summary in summaries:
                writer.writerow(self.build_row(summary))

        logger.info(f"CSV salvo: {output_path} ({len(summaries)} colaboradores)")
        return output_path

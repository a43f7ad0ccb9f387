"""
Excel Writer Module

Generates the consolidated bonus workbook with styling.
"""

from pathlib import Path
from typing import List, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from domain.bracket_tables import BracketTableRepository
from domain.entities import EmployeeBonusSummary, EmployeeRole, KPIType
from infrastructure.logger import get_logger

logger = get_logger("ExcelWriter")


class ExcelWriter:
    """
    Generates the HR summary workbook.

    Output format:
    - Sheet "Relatório Consolidado": Nome | Perfil | Salário | one column
      per KPI | Total, plus a totals row
    - Sheet "Faixas": every bracket table, one block per KPI

    Numeric cells keep the unrounded values; two-decimal display comes from
    the cell number format only.
    """

    COLORS = {
        'header': PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid'),
        'manager': PatternFill(start_color='DDEBF7', end_color='DDEBF7', fill_type='solid'),
        'total': PatternFill(start_color='D3D3D3', end_color='D3D3D3', fill_type='solid'),
    }

    BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    MONEY_FORMAT = '#,##0.00'
    SUMMARY_SHEET = "Relatório Consolidado"
    BRACKET_SHEET = "Faixas"

    def __init__(self, repository: Optional[BracketTableRepository] = None):
        self.repository = repository
        self.wb: Optional[Workbook] = None

    def create_report(
        self,
        summaries: List[EmployeeBonusSummary],
        output_path: Path,
        title: str = ""
    ) -> Path:
        """
        Create the workbook.

        Args:
            summaries: Rows to write, already sorted
            output_path: Path to save the Excel file
            title: Optional document title stored in workbook properties

        Returns:
            Path to the created file
        """
        self.wb = Workbook()
        ws = self.wb.active
        ws.title = self.SUMMARY_SHEET
        if title:
            self.wb.properties.title = title

        self._write_summary_sheet(ws, summaries)

        if self.repository is not None:
            self._write_bracket_sheet(self.wb.create_sheet(self.BRACKET_SHEET))

        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(output_path)
        logger.info(f"Excel salvo: {output_path}")
        return output_path

    def _header_cell(self, ws, row: int, col: int, value: str):
        cell = ws.cell(row, col, value)
        cell.font = Font(bold=True, color='FFFFFF')
        cell.fill = self.COLORS['header']
        cell.alignment = Alignment(horizontal='center', vertical='center')
        cell.border = self.BORDER
        return cell

    def _money_cell(self, ws, row: int, col: int, value: float):
        cell = ws.cell(row, col, value)
        cell.number_format = self.MONEY_FORMAT
        cell.alignment = Alignment(horizontal='right')
        cell.border = self.BORDER
        return cell

    def _write_summary_sheet(self, ws, summaries: List[EmployeeBonusSummary]) -> None:
        """Write the consolidated table."""
        headers = ["Nome", "Perfil", "Salário"] + [k.short_name for k in KPIType] + ["Total"]
        for col, header in enumerate(headers, start=1):
            self._header_cell(ws, 1, col, header)

        kpi_start = 4
        total_col = kpi_start + len(KPIType)

        row = 2
        for summary in summaries:
            employee = summary.employee
            name_cell = ws.cell(row, 1, employee.name)
            name_cell.border = self.BORDER
            role_cell = ws.cell(row, 2, employee.role.value)
            role_cell.alignment = Alignment(horizontal='center')
            role_cell.border = self.BORDER
            if employee.role == EmployeeRole.GERENTE:
                role_cell.fill = self.COLORS['manager']

            self._money_cell(ws, row, 3, employee.base_salary)
            for offset, kpi_type in enumerate(KPIType):
                self._money_cell(ws, row, kpi_start + offset, summary.value_for(kpi_type))

            total_cell = self._money_cell(ws, row, total_col, summary.total)
            total_cell.font = Font(bold=True)
            row += 1

        # Totals row
        label = ws.cell(row, 1, "Total")
        label.font = Font(bold=True)
        label.fill = self.COLORS['total']
        label.border = self.BORDER
        ws.cell(row, 2).fill = self.COLORS['total']
        ws.cell(row, 2).border = self.BORDER
        ws.cell(row, 3).fill = self.COLORS['total']
        ws.cell(row, 3).border = self.BORDER
        for offset, kpi_type in enumerate(KPIType):
            cell = self._money_cell(
                ws, row, kpi_start + offset,
                sum(s.value_for(kpi_type) for s in summaries)
            )
            cell.fill = self.COLORS['total']
        grand = self._money_cell(ws, row, total_col, sum(s.total for s in summaries))
        grand.font = Font(bold=True)
        grand.fill = self.COLORS['total']

        # Column widths
        ws.column_dimensions['A'].width = 28
        ws.column_dimensions['B'].width = 12
        for col in range(3, total_col + 1):
            ws.column_dimensions[get_column_letter(col)].width = 16
        ws.freeze_panes = 'B2'

    def _write_bracket_sheet(self, ws) -> None:
        """Write every bracket table as Atingimento / % Gerente / % Equipe."""
        row = 1
        for kpi_type in KPIType:
            title = ws.cell(row, 1, kpi_type.label)
            title.font = Font(bold=True, size=12)
            row += 1

            for col, header in enumerate(["Perfil", "Atingimento (%)", "Prêmio (%)"], start=1):
                self._header_cell(ws, row, col, header)
            row += 1

            for role in EmployeeRole:
                for bracket in self.repository.table_for(kpi_type, role):
                    values = (role.value, bracket.attaining, bracket.base_percentage)
                    for col, value in enumerate(values, start=1):
                        cell = ws.cell(row, col, value)
                        cell.border = self.BORDER
                        cell.alignment = Alignment(horizontal='center')
                    row += 1
            row += 1

        for col in range(1, 4):
            ws.column_dimensions[get_column_letter(col)].width = 18

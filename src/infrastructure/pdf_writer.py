"""
PDF Writer Module

Generates the consolidated bonus report as a PDF using fpdf2.
Mirrors the Excel summary sheet: one row per employee, one column per KPI.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from fpdf import FPDF

from domain.entities import EmployeeBonusSummary, EmployeeRole, KPIType
from infrastructure.logger import get_logger
from infrastructure.number_format import format_currency

logger = get_logger("PdfWriter")

FALLBACK_FONT = "Helvetica"


# ==============================================================================
# BonusPdf Class (A4 Landscape)
# ==============================================================================
class BonusPdf(FPDF):
    """
    FPDF document with title header and page-number footer.

    Core fonts cover Latin-1, which is enough for Portuguese text; a custom
    TTF can be supplied for anything else.
    """

    _font_family: str = FALLBACK_FONT

    def __init__(self, title: str = "", custom_font_path: Optional[str] = None):
        super().__init__(orientation='L', unit='mm', format='A4')
        self.title_text = title
        self._setup_font(custom_font_path)

    def _setup_font(self, custom_font_path: Optional[str]) -> None:
        """Load a custom font if one is configured and present."""
        if not custom_font_path:
            return
        font_path = Path(custom_font_path)
        if not font_path.exists():
            logger.warning(f"Fonte personalizada não encontrada: {font_path}")
            return
        try:
            self.add_font("CustomFont", "", str(font_path))
            self.add_font("CustomFont", "B", str(font_path))
            self._font_family = "CustomFont"
            logger.info(f"Fonte personalizada carregada: {font_path.name}")
        except Exception as e:
            logger.warning(f"Não foi possível carregar a fonte {font_path}: {e}")
            self._font_family = FALLBACK_FONT

    @property
    def font_family_name(self) -> str:
        return self._font_family

    def header(self) -> None:
        """Draw page header with centered title."""
        self.set_font(self._font_family, '', 14)
        self.cell(0, 10, self.title_text, align='C', new_x='LMARGIN', new_y='NEXT')
        self.ln(2)

    def footer(self) -> None:
        """Draw page footer with page number."""
        self.set_y(-12)
        self.set_font(self._font_family, '', 8)
        self.cell(0, 10, f'Página {self.page_no()}/{{nb}}', align='C')


# ==============================================================================
# PdfWriter Class
# ==============================================================================
class PdfWriter:
    """
    Generates the consolidated bonus PDF.

    Features:
    - A4 Landscape, header row repeated on every page
    - Manager rows tinted
    - Totals row at the end
    """

    COLORS: Dict[str, Tuple[int, int, int]] = {
        'header': (68, 114, 196),
        'manager': (221, 235, 247),
        'total': (211, 211, 211),
        'white': (255, 255, 255),
        'black': (0, 0, 0),
    }

    NAME_COL_WIDTH = 62
    ROLE_COL_WIDTH = 24
    MONEY_COL_WIDTH = 30
    TOTAL_COL_WIDTH = 34

    HEADER_ROW_HEIGHT = 8
    DATA_ROW_HEIGHT = 7
    BOTTOM_LIMIT = 18

    def __init__(self, custom_font_path: Optional[str] = None):
        self._custom_font_path = custom_font_path

    def create_report(
        self,
        summaries: List[EmployeeBonusSummary],
        output_path: Path,
        title: str = "Relatório Consolidado de Premiação"
    ) -> None:
        """
        Create the PDF report. Nothing is written for an empty list.
        """
        if not summaries:
            return

        pdf = BonusPdf(title=title, custom_font_path=self._custom_font_path)
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=False)
        pdf.set_margins(10, 10, 10)
        pdf.add_page()

        self._draw_header_row(pdf)
        for summary in summaries:
            if pdf.get_y() + self.DATA_ROW_HEIGHT > pdf.h - self.BOTTOM_LIMIT:
                pdf.add_page()
                self._draw_header_row(pdf)
            self._draw_employee_row(pdf, summary)

        if pdf.get_y() + self.DATA_ROW_HEIGHT > pdf.h - self.BOTTOM_LIMIT:
            pdf.add_page()
            self._draw_header_row(pdf)
        self._draw_totals_row(pdf, summaries)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf.output(str(output_path))
        logger.info(f"PDF salvo: {output_path}")

    def _column_titles(self) -> List[Tuple[str, float]]:
        columns = [
            ("Nome", self.NAME_COL_WIDTH),
            ("Perfil", self.ROLE_COL_WIDTH),
            ("Salário", self.MONEY_COL_WIDTH),
        ]
        columns.extend((k.short_name, self.MONEY_COL_WIDTH) for k in KPIType)
        columns.append(("Total", self.TOTAL_COL_WIDTH))
        return columns

    def _draw_header_row(self, pdf: BonusPdf) -> None:
        pdf.set_font(pdf.font_family_name, 'B', 9)
        pdf.set_fill_color(*self.COLORS['header'])
        pdf.set_text_color(*self.COLORS['white'])
        for text, width in self._column_titles():
            pdf.cell(width, self.HEADER_ROW_HEIGHT, text, border=1, align='C', fill=True)
        pdf.ln(self.HEADER_ROW_HEIGHT)
        pdf.set_text_color(*self.COLORS['black'])

    def _draw_employee_row(self, pdf: BonusPdf, summary: EmployeeBonusSummary) -> None:
        employee = summary.employee
        is_manager = employee.role == EmployeeRole.GERENTE
        pdf.set_fill_color(*(self.COLORS['manager'] if is_manager else self.COLORS['white']))
        pdf.set_font(pdf.font_family_name, '', 9)

        h = self.DATA_ROW_HEIGHT
        pdf.cell(self.NAME_COL_WIDTH, h, employee.name, border=1, fill=True)
        pdf.cell(self.ROLE_COL_WIDTH, h, employee.role.value, border=1, align='C', fill=True)
        pdf.cell(self.MONEY_COL_WIDTH, h, format_currency(employee.base_salary), border=1, align='R', fill=True)
        for kpi_type in KPIType:
            pdf.cell(
                self.MONEY_COL_WIDTH, h, format_currency(summary.value_for(kpi_type)),
                border=1, align='R', fill=True
            )
        pdf.set_font(pdf.font_family_name, 'B', 9)
        pdf.cell(self.TOTAL_COL_WIDTH, h, format_currency(summary.total), border=1, align='R', fill=True)
        pdf.ln(h)

    def _draw_totals_row(self, pdf: BonusPdf, summaries: List[EmployeeBonusSummary]) -> None:
        pdf.set_fill_color(*self.COLORS['total'])
        pdf.set_font(pdf.font_family_name, 'B', 9)

        h = self.DATA_ROW_HEIGHT
        label_width = self.NAME_COL_WIDTH + self.ROLE_COL_WIDTH + self.MONEY_COL_WIDTH
        pdf.cell(label_width, h, "Total", border=1, fill=True)
        for kpi_type in KPIType:
            pdf.cell(
                self.MONEY_COL_WIDTH, h,
                format_currency(sum(s.value_for(kpi_type) for s in summaries)),
                border=1, align='R', fill=True
            )
        pdf.cell(
            self.TOTAL_COL_WIDTH, h, format_currency(sum(s.total for s in summaries)),
            border=1, align='R', fill=True
        )
        pdf.ln(h)

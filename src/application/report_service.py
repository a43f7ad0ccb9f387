"""
Report Service Module

Application layer service that orchestrates bonus calculation and report
generation. Keeps the CLI free of business logic.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from config.config_manager import AppConfig, ConfigManager
from domain.bonus_calculator import BonusCalculator
from domain.bracket_tables import BracketTableRepository
from domain.entities import EmployeeBonusSummary
from domain.roster import Roster
from domain.sorting import sort_summaries
from infrastructure.logger import get_logger
from infrastructure.number_format import format_filename

logger = get_logger("ReportService")


@dataclass
class ReportGenerationParams:
    """
    Parameters for report generation.

    Decouples the service from AppConfig so callers can build runs directly.
    """
    output_dir: Path
    year: int
    month: int

    csv_filename_pattern: str = "relatorio_premiacao_{year}_{month}.csv"
    excel_filename_pattern: str = "relatorio_premiacao_{year}_{month}.xlsx"
    pdf_filename_pattern: str = "relatorio_premiacao_{year}_{month}.pdf"
    csv_delimiter: str = ";"
    sort_by: str = "roster"

    generate_excel: bool = True
    generate_pdf: bool = True
    custom_font_path: Optional[str] = None


@dataclass
class ReportResult:
    """Result of report generation."""
    success: bool
    csv_path: Optional[Path] = None
    excel_path: Optional[Path] = None
    pdf_path: Optional[Path] = None
    employee_count: int = 0
    grand_total: float = 0.0
    warnings: List[str] = field(default_factory=list)

    @property
    def written_paths(self) -> List[Path]:
        return [p for p in (self.csv_path, self.excel_path, self.pdf_path) if p is not None]


class BonusReportService:
    """
    Application service for bonus reports.

    This service:
    - Runs the bonus engine for every employee of a roster
    - Writes CSV always, Excel and PDF when enabled
    - Imports rosters from files into an existing Roster
    """

    def __init__(self, calculator: Optional[BonusCalculator] = None):
        self.calculator = calculator or BonusCalculator()

    @classmethod
    def from_config(cls, manager: ConfigManager) -> "BonusReportService":
        """
        Build a service whose bracket tables come from the configured JSON
        override, or the shipped defaults when none is set.

        Raises:
            ConfigurationError: If the configured tables are invalid
        """
        tables_path = manager.config.paths.bracket_tables
        if tables_path:
            path = manager.resolve_path(tables_path)
            logger.info(f"Carregando tabelas de faixas: {path}")
            repository = BracketTableRepository.from_json_file(path)
        else:
            repository = BracketTableRepository()
        return cls(BonusCalculator(repository))

    def build_summaries(self, roster: Roster) -> List[EmployeeBonusSummary]:
        """Calculate every employee, in roster order."""
        return [
            self.calculator.calculate_summary(employee, roster.performance_for(employee.id))
            for employee in roster.employees
        ]

    def generate_report(self, roster: Roster, params: ReportGenerationParams) -> ReportResult:
        """
        Generate the bonus report files.

        Args:
            roster: Employees and performance to report on
            params: Output parameters

        Returns:
            ReportResult with the files written

        Raises:
            ValueError: If the roster is empty
            PermissionError: If files cannot be written
        """
        from infrastructure.csv_writer import CsvReportWriter
        from infrastructure.excel_writer import ExcelWriter

        if len(roster) == 0:
            raise ValueError("Nenhum colaborador cadastrado para gerar o relatório")

        summaries = sort_summaries(self.build_summaries(roster), params.sort_by)
        grand_total = sum(s.total for s in summaries)
        logger.info(
            f"Cálculo concluído: {len(summaries)} colaboradores, "
            f"total {grand_total:.2f}"
        )

        output_dir = Path(params.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        result = ReportResult(
            success=True,
            employee_count=len(summaries),
            grand_total=grand_total
        )

        csv_path = output_dir / format_filename(params.csv_filename_pattern, params.year, params.month)
        result.csv_path = CsvReportWriter(delimiter=params.csv_delimiter).write(summaries, csv_path)

        title = f"Relatório Consolidado de Premiação {params.month:02d}/{params.year}"

        if params.generate_excel:
            excel_path = output_dir / format_filename(params.excel_filename_pattern, params.year, params.month)
            writer = ExcelWriter(self.calculator.repository)
            result.excel_path = writer.create_report(summaries, excel_path, title=title)

        if params.generate_pdf:
            try:
                result.pdf_path = self._generate_pdf_report(params, summaries, output_dir, title)
            except Exception as e:
                # PDF is a convenience copy; CSV/Excel are already written
                logger.error(f"Falha ao gerar PDF: {e}")
                result.warnings.append(f"PDF não gerado: {e}")

        return result

    def _generate_pdf_report(
        self,
        params: ReportGenerationParams,
        summaries: List[EmployeeBonusSummary],
        output_dir: Path,
        title: str
    ) -> Path:
        from infrastructure.pdf_writer import PdfWriter

        pdf_path = output_dir / format_filename(params.pdf_filename_pattern, params.year, params.month)
        PdfWriter(custom_font_path=params.custom_font_path).create_report(summaries, pdf_path, title=title)
        return pdf_path

    def import_roster(self, roster: Roster, file_path: Path):
        """
        Import employees from a file into the roster.

        Returns:
            RosterImportResult describing what was imported and skipped

        Raises:
            RosterFormatError: If the file cannot be read
        """
        from infrastructure.roster_parser import RosterParser

        result = RosterParser().parse_file(file_path)
        if result.employees:
            roster.extend(result.employees)
            logger.info(f"{result.imported_count} colaboradores importados!")
        return result

    @staticmethod
    def build_params_from_config(
        config: AppConfig,
        year: int,
        month: int,
        output_dir: Optional[Path] = None
    ) -> ReportGenerationParams:
        """
        Build ReportGenerationParams from AppConfig.

        Args:
            config: Application configuration
            year: Report year
            month: Report month
            output_dir: Overrides the configured output directory

        Returns:
            ReportGenerationParams ready for generate_report()
        """
        settings = config.output_settings
        if output_dir is None:
            output_dir = Path(settings.output_dir) if settings.output_dir else Path(".")

        return ReportGenerationParams(
            output_dir=output_dir,
            year=year,
            month=month,
            csv_filename_pattern=settings.csv_filename_pattern,
            excel_filename_pattern=settings.excel_filename_pattern,
            pdf_filename_pattern=settings.pdf_filename_pattern,
            csv_delimiter=settings.csv_delimiter,
            sort_by=settings.sort_by,
            generate_excel=settings.generate_excel,
            generate_pdf=settings.generate_pdf,
            custom_font_path=config.paths.custom_font_path or None,
        )

"""
Command Line Interface

click front-end for the bonus calculator: roster maintenance, KPI entry,
per-employee calculation and consolidated report export.
"""

from datetime import date
from pathlib import Path
from typing import Optional

import click

from application.report_service import BonusReportService
from config.config_manager import ConfigManager
from domain.entities import EmployeeRole, KPIType
from domain.exceptions import BonusError
from domain.sorting import SORT_OPTIONS
from infrastructure.logger import get_logger, set_console_level
from infrastructure.number_format import (
    format_currency, format_percentage, parse_locale_number
)
from infrastructure.roster_store import RosterStore

logger = get_logger("CLI")

ROLE_CHOICE = click.Choice([r.value for r in EmployeeRole], case_sensitive=False)
KPI_CHOICE = click.Choice([k.value for k in KPIType], case_sensitive=False)


class AppContext:
    """Objects shared by every command of one invocation."""

    def __init__(self, config_path: Path):
        self.manager = ConfigManager(config_path)
        self.config = self.manager.load()
        self.store = RosterStore(self.manager.resolve_path(self.config.paths.roster_store))
        self._service: Optional[BonusReportService] = None

    @property
    def service(self) -> BonusReportService:
        if self._service is None:
            self._service = BonusReportService.from_config(self.manager)
        return self._service


def _parse_number(value: str, what: str) -> float:
    number = parse_locale_number(value)
    if number is None:
        raise click.BadParameter(f"'{value}' não é um número válido", param_hint=what)
    return number


def _require_employee(roster, employee_id: str):
    employee = roster.get(employee_id)
    if employee is None:
        raise click.ClickException(f"Colaborador não encontrado: {employee_id}")
    return employee


@click.group()
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=ConfigManager.DEFAULT_CONFIG_PATH,
    envvar="KPI_BONUS_CONFIG",
    show_default=True,
    help="Arquivo de configuração JSON.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """Calculadora de Prêmios por KPI."""
    app = AppContext(config_path)
    try:
        set_console_level(app.config.log_level)
    except ValueError as e:
        logger.warning(str(e))
    ctx.obj = app


@cli.command("list")
@click.pass_obj
def list_employees(app: AppContext) -> None:
    """Lista os colaboradores com o prêmio total estimado."""
    roster = app.store.load()
    if not len(roster):
        click.echo("Nenhum colaborador cadastrado.")
        return

    try:
        summaries = app.service.build_summaries(roster)
    except BonusError as e:
        raise click.ClickException(str(e))

    for summary in summaries:
        employee = summary.employee
        click.echo(
            f"{employee.id:<14} {employee.name:<30} {employee.role.value:<8} "
            f"{format_currency(employee.base_salary):>16} {format_currency(summary.total):>16}"
        )


@cli.command("add")
@click.argument("name")
@click.argument("salary")
@click.option("--role", type=ROLE_CHOICE, default=EmployeeRole.EQUIPE.value, show_default=True)
@click.pass_obj
def add_employee(app: AppContext, name: str, salary: str, role: str) -> None:
    """Adiciona um colaborador (SALARY aceita "R$ 5.000,00")."""
    roster = app.store.load()
    try:
        employee = roster.add_employee(name, _parse_number(salary, "SALARY"), EmployeeRole(role.upper()))
    except BonusError as e:
        raise click.ClickException(str(e))
    app.store.save(roster)
    click.echo(f"Colaborador adicionado: {employee.name} ({employee.id})")


@cli.command("remove")
@click.argument("employee_id")
@click.pass_obj
def remove_employee(app: AppContext, employee_id: str) -> None:
    """Remove um colaborador e seus indicadores."""
    roster = app.store.load()
    if not roster.remove_employee(employee_id):
        raise click.ClickException(f"Colaborador não encontrado: {employee_id}")
    app.store.save(roster)
    click.echo(f"Colaborador removido: {employee_id}")


@cli.command("set-kpi")
@click.argument("employee_id")
@click.argument("kpi", type=KPI_CHOICE)
@click.argument("value")
@click.pass_obj
def set_kpi(app: AppContext, employee_id: str, kpi: str, value: str) -> None:
    """Registra o atingimento (%) de um indicador."""
    roster = app.store.load()
    kpi_type = KPIType(kpi.upper())
    try:
        roster.set_achievement(employee_id, kpi_type, _parse_number(value, "VALUE"))
    except BonusError as e:
        raise click.ClickException(str(e))
    app.store.save(roster)
    click.echo(f"{kpi_type.label}: {format_percentage(roster.performance_for(employee_id)[kpi_type])}")


@cli.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def import_roster(app: AppContext, file: Path) -> None:
    """Importa colaboradores de um CSV (nome;salário;perfil) ou planilha."""
    roster = app.store.load()
    try:
        result = app.service.import_roster(roster, file)
    except BonusError as e:
        raise click.ClickException(str(e))

    if result.employees:
        app.store.save(roster)
        app.config.paths.last_import_file = str(file)
        app.manager.save()
    click.echo(f"{result.imported_count} colaboradores importados!")
    if result.skipped:
        click.echo(f"Linhas ignoradas: {', '.join(str(n) for n in result.skipped)}")


@cli.command("calculate")
@click.argument("employee_id")
@click.pass_obj
def calculate(app: AppContext, employee_id: str) -> None:
    """Mostra o cálculo por indicador de um colaborador."""
    roster = app.store.load()
    employee = _require_employee(roster, employee_id)
    try:
        summary = app.service.calculator.calculate_summary(
            employee, roster.performance_for(employee_id)
        )
    except BonusError as e:
        raise click.ClickException(str(e))

    click.echo(f"{employee.name} | Base: {format_currency(employee.base_salary)} | {employee.role.value}")
    for result in summary.results:
        click.echo(
            f"  {result.kpi_type.label:<22} "
            f"{format_percentage(result.achievement):>10} -> "
            f"{format_percentage(result.bonus_percentage):>7} "
            f"{format_currency(result.bonus_value):>16}"
        )
    click.echo(f"  {'Total Estimado':<22} {format_currency(summary.total):>37}")


@cli.command("report")
@click.option("--year", type=int, default=None, help="Ano (padrão: atual).")
@click.option("--month", type=click.IntRange(1, 12), default=None, help="Mês (padrão: atual).")
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), default=None)
@click.option("--sort-by", type=click.Choice(SORT_OPTIONS), default=None)
@click.option("--no-excel", is_flag=True, help="Não gerar a planilha.")
@click.option("--no-pdf", is_flag=True, help="Não gerar o PDF.")
@click.pass_obj
def report(
    app: AppContext,
    year: Optional[int],
    month: Optional[int],
    output_dir: Optional[Path],
    sort_by: Optional[str],
    no_excel: bool,
    no_pdf: bool
) -> None:
    """Gera o relatório consolidado (CSV, Excel e PDF)."""
    today = date.today()
    params = BonusReportService.build_params_from_config(
        app.config,
        year or today.year,
        month or today.month,
        output_dir=output_dir
    )
    if sort_by:
        params.sort_by = sort_by
    if no_excel:
        params.generate_excel = False
    if no_pdf:
        params.generate_pdf = False

    roster = app.store.load()
    try:
        result = app.service.generate_report(roster, params)
    except (BonusError, ValueError) as e:
        raise click.ClickException(str(e))

    for path in result.written_paths:
        click.echo(f"Gerado: {path}")
    for warning in result.warnings:
        click.echo(f"Aviso: {warning}", err=True)
    click.echo(f"Total Premiação: {format_currency(result.grand_total)}")


@cli.command("brackets")
@click.option("--role", type=ROLE_CHOICE, default=None, help="Somente um perfil.")
@click.pass_obj
def show_brackets(app: AppContext, role: Optional[str]) -> None:
    """Mostra as tabelas de faixas configuradas."""
    try:
        repository = app.service.calculator.repository
    except BonusError as e:
        raise click.ClickException(str(e))

    selected = EmployeeRole(role.upper()) if role else None
    for kpi_type, table_role, table in repository.items():
        if selected is not None and table_role != selected:
            continue
        steps = ", ".join(
            f"{format_percentage(b.attaining)} -> {format_percentage(b.base_percentage)}"
            for b in table
        )
        click.echo(f"{kpi_type.label:<22} {table_role.value:<8} {steps}")


def main() -> None:
    """Console script entry point."""
    cli()

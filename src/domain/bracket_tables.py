"""
Bracket Tables Module

Holds the KPI x role matrix of prize brackets and validates it once at load
time. Lookups afterwards are plain dictionary reads.
"""

import json
import math
from pathlib import Path
from typing import Dict, Iterable, Mapping, Sequence, Tuple

from .entities import EmployeeRole, KPIType, PrizeBracket
from .exceptions import ConfigurationError

BracketTable = Tuple[PrizeBracket, ...]
BracketMatrix = Dict[KPIType, Dict[EmployeeRole, BracketTable]]


def _table(*pairs: Tuple[float, float]) -> BracketTable:
    return tuple(PrizeBracket(attaining=a, base_percentage=p) for a, p in pairs)


# (attaining %, bonus % of base salary)
DEFAULT_BRACKET_TABLES: BracketMatrix = {
    KPIType.MONTHLY_BSC: {
        EmployeeRole.GERENTE: _table(
            (80, 6), (90, 9), (100, 12), (110, 15), (120, 18),
        ),
        EmployeeRole.EQUIPE: _table(
            (80, 4), (90, 6), (100, 8), (110, 10), (120, 12),
        ),
    },
    KPIType.QUARTERLY_GERENCIAL: {
        EmployeeRole.GERENTE: _table(
            (85, 8), (100, 12), (115, 16),
        ),
        EmployeeRole.EQUIPE: _table(
            (85, 3), (100, 5), (115, 7),
        ),
    },
    KPIType.MONTHLY_MAT: {
        EmployeeRole.GERENTE: _table(
            (70, 3), (85, 5), (100, 7), (120, 9),
        ),
        EmployeeRole.EQUIPE: _table(
            (70, 2), (85, 3), (100, 4), (120, 6),
        ),
    },
    KPIType.QUARTERLY_SPECIAL: {
        EmployeeRole.GERENTE: _table(
            (100, 10), (130, 20),
        ),
        EmployeeRole.EQUIPE: _table(
            (100, 5), (130, 10),
        ),
    },
}


def validate_table(
    kpi_type: KPIType,
    role: EmployeeRole,
    brackets: Sequence[PrizeBracket]
) -> BracketTable:
    """
    Check a single bracket table and return it as an immutable tuple.

    Args:
        kpi_type: KPI the table belongs to (for error messages)
        role: Role the table belongs to (for error messages)
        brackets: Brackets in declaration order

    Returns:
        The brackets as a tuple

    Raises:
        ConfigurationError: If the table is empty, has non-finite or negative
            values, or thresholds that are not strictly ascending
    """
    where = f"{kpi_type.value}/{role.value}"
    table = tuple(brackets)
    if not table:
        raise ConfigurationError(f"Tabela de faixas vazia para {where}")

    previous = None
    for bracket in table:
        for value in (bracket.attaining, bracket.base_percentage):
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(
                    f"Valor inválido na tabela {where}: {bracket}"
                )
        if previous is not None:
            if bracket.attaining == previous:
                raise ConfigurationError(
                    f"Limite duplicado {bracket.attaining} na tabela {where}"
                )
            if bracket.attaining < previous:
                raise ConfigurationError(
                    f"Limites fora de ordem na tabela {where}: "
                    f"{bracket.attaining} após {previous}"
                )
        previous = bracket.attaining

    return table


def _validate_matrix(tables: Mapping) -> BracketMatrix:
    """Validate full KPI x role coverage and every table in it."""
    matrix: BracketMatrix = {}
    for kpi_type in KPIType:
        by_role = tables.get(kpi_type)
        if by_role is None:
            raise ConfigurationError(f"Nenhuma tabela configurada para {kpi_type.value}")
        matrix[kpi_type] = {}
        for role in EmployeeRole:
            brackets = by_role.get(role)
            if brackets is None:
                raise ConfigurationError(
                    f"Nenhuma tabela configurada para {kpi_type.value}/{role.value}"
                )
            matrix[kpi_type][role] = validate_table(kpi_type, role, brackets)

    known = set(KPIType)
    unknown = [key for key in tables if key not in known]
    if unknown:
        raise ConfigurationError(f"KPIs desconhecidos na configuração: {unknown}")
    return matrix


class BracketTableRepository:
    """
    Read-only store of bracket tables, one per (KPIType, EmployeeRole).

    The whole matrix is validated on construction; reloads go through
    replace_tables(), which validates a complete new matrix and swaps it in
    with one assignment so readers always see a consistent set of tables.
    """

    def __init__(self, tables: Mapping = None):
        self._tables: BracketMatrix = _validate_matrix(
            DEFAULT_BRACKET_TABLES if tables is None else tables
        )

    def table_for(self, kpi_type: KPIType, role: EmployeeRole) -> BracketTable:
        """
        Get the bracket table for a KPI and role.

        Raises:
            ConfigurationError: If the pair is not configured, or either key
                is not an enum member (plain strings included)
        """
        if not isinstance(kpi_type, KPIType) or not isinstance(role, EmployeeRole):
            raise ConfigurationError(
                f"Tabela de faixas inexistente para ({kpi_type!r}, {role!r})"
            )
        try:
            return self._tables[kpi_type][role]
        except (KeyError, TypeError):
            raise ConfigurationError(
                f"Tabela de faixas inexistente para ({kpi_type!r}, {role!r})"
            ) from None

    def replace_tables(self, tables: Mapping) -> None:
        """Validate and atomically install a complete new matrix."""
        self._tables = _validate_matrix(tables)

    def items(self) -> Iterable[Tuple[KPIType, EmployeeRole, BracketTable]]:
        """Iterate (kpi, role, table) in enumeration order."""
        tables = self._tables
        for kpi_type in KPIType:
            for role in EmployeeRole:
                yield kpi_type, role, tables[kpi_type][role]

    # --------------------------------------------------------------------------
    # Serialization
    # --------------------------------------------------------------------------
    def to_dict(self) -> dict:
        """JSON-compatible representation of the current matrix."""
        return {
            kpi_type.value: {
                role.value: [
                    {"attaining": b.attaining, "basePercentage": b.base_percentage}
                    for b in self._tables[kpi_type][role]
                ]
                for role in EmployeeRole
            }
            for kpi_type in KPIType
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "BracketTableRepository":
        """
        Build a repository from the to_dict() representation.

        Raises:
            ConfigurationError: On unknown keys, malformed entries or any
                table validation failure
        """
        return cls(_parse_matrix(data))

    @classmethod
    def from_json_file(cls, path: Path) -> "BracketTableRepository":
        """Load a repository from a JSON file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Não foi possível ler {path}: {e}") from e
        return cls.from_dict(data)


def _parse_matrix(data: Mapping) -> BracketMatrix:
    if not isinstance(data, Mapping):
        raise ConfigurationError("A configuração de faixas deve ser um objeto JSON")

    matrix: BracketMatrix = {}
    for kpi_key, by_role in data.items():
        try:
            kpi_type = KPIType(kpi_key)
        except ValueError:
            raise ConfigurationError(f"KPI desconhecido: {kpi_key}") from None
        if not isinstance(by_role, Mapping):
            raise ConfigurationError(f"Entrada inválida para {kpi_key}")

        matrix[kpi_type] = {}
        for role_key, entries in by_role.items():
            try:
                role = EmployeeRole(role_key)
            except ValueError:
                raise ConfigurationError(f"Perfil desconhecido: {role_key}") from None
            try:
                matrix[kpi_type][role] = tuple(
                    PrizeBracket(
                        attaining=float(entry["attaining"]),
                        base_percentage=float(entry["basePercentage"]),
                    )
                    for entry in entries
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Faixa malformada em {kpi_key}/{role_key}: {e}"
                ) from None
    return matrix

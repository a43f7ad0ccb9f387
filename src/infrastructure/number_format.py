"""
Number Format Module

Parsing of locale-formatted numbers from imported text, and the two output
formats used by reports: plain export amounts and pt-BR currency display.
"""

import re
from typing import Optional

# "." followed by exactly three digits is a thousands separator
_THOUSANDS_DOT = re.compile(r"\.(?=[0-9]{3})")
_CURRENCY_NOISE = re.compile(r"[R$\s ]")
_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def parse_locale_number(text: str) -> Optional[float]:
    """
    Parse a number written the Brazilian way.

    Examples: "R$ 18.742,00" -> 18742.0, "5000" -> 5000.0, "4,5" -> 4.5

    Args:
        text: Raw cell text

    Returns:
        The parsed value, or None if the text is not a number
    """
    if text is None:
        return None
    cleaned = _CURRENCY_NOISE.sub("", str(text))
    cleaned = _THOUSANDS_DOT.sub("", cleaned)
    cleaned = cleaned.replace(",", ".", 1)
    if not _NUMBER.match(cleaned):
        return None
    return float(cleaned)


def format_export_amount(value: float) -> str:
    """Two decimals, "." separator, no grouping ("1234.50")."""
    return f"{value:.2f}"


def format_currency(value: float, symbol: str = "R$") -> str:
    """
    pt-BR currency for display only ("R$ 1.234,56").

    Never feed the result back into calculations.
    """
    grouped = f"{abs(value):,.2f}"
    # 1,234.56 -> 1.234,56
    grouped = grouped.replace(",", "\0").replace(".", ",").replace("\0", ".")
    sign = "-" if value < 0 and round(value, 2) != 0 else ""
    return f"{sign}{symbol} {grouped}"


def format_percentage(value: float) -> str:
    """Display a percentage with a decimal comma ("12,5%")."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text.replace('.', ',')}%"


def format_filename(pattern: str, year: int, month: int) -> str:
    """Format filename pattern with placeholders."""
    return pattern.format(
        year=year,
        month=f"{month:02d}"
    )

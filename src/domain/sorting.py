"""
Sorting Utilities Module

Ordering of bonus summaries for report output.
"""

from typing import List

from domain.entities import EmployeeBonusSummary

SORT_OPTIONS = ("roster", "total", "name")


def sort_summaries(
    summaries: List[EmployeeBonusSummary],
    sort_by: str = "roster"
) -> List[EmployeeBonusSummary]:
    """
    Sort bonus summaries by specified criteria.

    Args:
        summaries: List of EmployeeBonusSummary objects
        sort_by: "roster" (unchanged), "total" (highest first) or "name"

    Returns:
        Sorted list (new list, does not modify original)
    """
    if sort_by == "name":
        return sorted(summaries, key=lambda s: s.employee.name.casefold())
    if sort_by == "total":
        # Ties keep roster order
        return sorted(summaries, key=lambda s: -s.total)
    return list(summaries)

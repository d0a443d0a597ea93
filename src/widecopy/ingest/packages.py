"""Selection of units by import-path pattern."""

from __future__ import annotations

import re
from typing import Iterable, List

from widecopy.analysis.model import ResolvedUnit
from widecopy.exceptions import ResolutionFailure


def path_to_regexp(pattern: str) -> re.Pattern[str]:
    """Compile an import-path pattern where ``...`` matches any string.

    ``foo/...`` also matches ``foo`` itself.
    """
    expr = re.escape(pattern).replace(r"\.\.\.", ".*")
    if expr.endswith("/.*"):
        expr = expr[: -len("/.*")] + "(/.*)?"
    return re.compile("^" + expr + "$")


def select_units(units: Iterable[ResolvedUnit], pattern: str | None) -> List[ResolvedUnit]:
    units = list(units)
    if pattern is None:
        return units
    matcher = path_to_regexp(pattern.rstrip("/") or pattern)
    selected = [unit for unit in units if matcher.match(unit.name)]
    if not selected:
        raise ResolutionFailure(f"unable to find packages matching {pattern!r}")
    return selected

from __future__ import annotations

import pytest

from widecopy.analysis.model import ResolvedUnit
from widecopy.exceptions import ResolutionFailure
from widecopy.ingest.packages import path_to_regexp, select_units


@pytest.mark.parametrize(
    ("pattern", "name", "expected"),
    [
        ("example.com/shapes", "example.com/shapes", True),
        ("example.com/shapes", "example.com/shapes/inner", False),
        ("example.com/...", "example.com", True),
        ("example.com/...", "example.com/shapes/inner", True),
        ("example.com/...", "example.company", False),
        ("net/...http", "net/x/http", True),
        ("a.b", "axb", False),
    ],
)
def test_path_to_regexp(pattern: str, name: str, expected: bool) -> None:
    assert bool(path_to_regexp(pattern).match(name)) is expected


def test_select_units_filters_by_name() -> None:
    units = [ResolvedUnit(name="x/a"), ResolvedUnit(name="x/b"), ResolvedUnit(name="y")]
    assert [unit.name for unit in select_units(units, "x/...")] == ["x/a", "x/b"]
    assert select_units(units, None) == units


def test_select_units_without_match_fails() -> None:
    with pytest.raises(ResolutionFailure, match="unable to find packages matching 'z/...'"):
        select_units([ResolvedUnit(name="x")], "z/...")

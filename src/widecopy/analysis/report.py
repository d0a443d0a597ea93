"""Rendering of copy sites as lint-style lines."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from widecopy.analysis.model import CopySite
from widecopy.json_types import JSONObject


def sort_sites(sites: Iterable[CopySite]) -> List[CopySite]:
    # Stable: sites sharing a position keep their scan order.
    return sorted(
        sites,
        key=lambda site: (
            site.function.position.file,
            site.function.position.line,
            site.function.position.column,
        ),
    )


def sentence(parts: Sequence[str]) -> str:
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2:
        return f"{parts[0]} and {parts[1]}"
    return ", ".join(parts[:-1]) + ", and " + parts[-1]


def render_message(site: CopySite) -> str:
    noun = "pointers" if len(site.should_be) > 1 else "a pointer"
    return (
        f"{sentence(site.should_be)} should be made into {noun}"
        f" ({site.function.describe()})"
    )


def render_site(site: CopySite) -> str:
    return f"{site.function.position}: {render_message(site)}"


def report(sites: Iterable[CopySite]) -> List[str]:
    return [render_site(site) for site in sort_sites(sites)]


def report_payload(sites: Iterable[CopySite]) -> JSONObject:
    entries: list[JSONObject] = []
    for site in sort_sites(sites):
        position = site.function.position
        entries.append(
            {
                "file": position.file,
                "line": position.line,
                "column": position.column,
                "function": site.function.describe(),
                "should_be": list(site.should_be),
                "message": render_message(site),
            }
        )
    return {"sites": entries, "count": len(entries)}

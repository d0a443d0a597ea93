"""Choose the graph document provider for a run.

An explicit format wins; otherwise the first input path whose suffix a
provider claims decides, and directories fall back to the default format.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

from widecopy.exceptions import ResolutionFailure
from widecopy.ingest.adapter_contract import TypeGraphProvider
from widecopy.ingest.document_provider import JsonGraphProvider, TomlGraphProvider

_PROVIDERS: Mapping[str, TypeGraphProvider] = {
    provider.format_id: provider
    for provider in (JsonGraphProvider(), TomlGraphProvider())
}


def known_formats() -> list[str]:
    return sorted(_PROVIDERS)


def _claimed_format(path: Path) -> str | None:
    suffix = path.suffix.lower()
    for format_id, provider in _PROVIDERS.items():
        if suffix and suffix in provider.file_extensions:
            return format_id
    return None


def resolve_provider(
    *,
    paths: Sequence[Path],
    format_id: str | None = None,
    default_format_id: str = "json",
) -> TypeGraphProvider:
    if format_id is None:
        claimed = (_claimed_format(path) for path in paths)
        format_id = next((found for found in claimed if found), default_format_id)
    provider = _PROVIDERS.get(format_id.lower())
    if provider is None:
        raise ResolutionFailure(
            f"unknown graph format {format_id!r} (known: {', '.join(known_formats())})"
        )
    return provider

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from widecopy.analysis.model import ResolvedUnit


@runtime_checkable
class TypeGraphProvider(Protocol):
    """Produces fully resolved units for the analysis core.

    Locating sources, parsing and resolving names all happen behind this
    interface. A provider that cannot produce a valid graph raises
    ``ResolutionFailure``.
    """

    format_id: str
    file_extensions: tuple[str, ...]

    def discover_files(
        self,
        paths: Sequence[Path],
        *,
        exclude: Sequence[str] = (),
    ) -> list[Path]: ...

    def load_units(self, paths: Sequence[Path]) -> list[ResolvedUnit]: ...

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import List, Optional
import json

import typer

from widecopy.analysis.model import ResolvedUnit
from widecopy.analysis.pipeline import AnalysisResult, analyze_units, type_footprints
from widecopy.analysis.report import report, report_payload
from widecopy.config import (
    SizeConfig,
    exclude_list,
    merge_payload,
    size_config_from_payload,
    size_defaults,
)
from widecopy.exceptions import WidecopyError
from widecopy.ingest import resolve_provider, select_units
from widecopy.logging import configure_logging, get_logger
from widecopy.schema import CheckResponseDTO

app = typer.Typer(
    add_completion=False,
    help="Flag functions that pass wide structs by value instead of by pointer.",
)
logger = get_logger("cli")

EXIT_CLEAN = 0
EXIT_ERROR = 1
EXIT_FINDINGS = 2


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class CheckRequest:
    paths: tuple[Path, ...]
    config: SizeConfig
    exclude: tuple[str, ...] = ()
    package: str | None = None
    format_id: str | None = None


def build_request(
    paths: List[Path],
    *,
    root: Path,
    config_path: Optional[Path],
    max_width: Optional[int],
    word_size: Optional[int],
    max_align: Optional[int],
    package: Optional[str],
    format_in: Optional[str],
) -> CheckRequest:
    defaults = size_defaults(root=root, config_path=config_path)
    merged = merge_payload(
        {"max": max_width, "word_size": word_size, "max_align": max_align},
        defaults,
    )
    return CheckRequest(
        paths=tuple(paths),
        config=size_config_from_payload(merged),
        exclude=tuple(exclude_list(merged)),
        package=package,
        format_id=format_in,
    )


def load_units(request: CheckRequest) -> list[ResolvedUnit]:
    provider = resolve_provider(paths=list(request.paths), format_id=request.format_id)
    files = provider.discover_files(request.paths, exclude=request.exclude)
    logger.debug("%s provider: %d document(s)", provider.format_id, len(files))
    return select_units(provider.load_units(files), request.package)


def run_check(request: CheckRequest) -> AnalysisResult:
    return analyze_units(load_units(request), request.config)


def _fail(exc: WidecopyError) -> typer.Exit:
    typer.secho(str(exc), err=True, fg=typer.colors.RED)
    return typer.Exit(code=EXIT_ERROR)


_PATHS_ARGUMENT = typer.Argument(..., help="Graph documents or directories of them.")
_MAX_OPTION = typer.Option(
    None,
    "--max",
    help="Maximum size in bytes a struct can be before by-value uses are flagged [default: 16].",
)
_WORD_SIZE_OPTION = typer.Option(
    None,
    "--word-size",
    help="Word size to assume when calculating struct size [default: 8].",
)
_MAX_ALIGN_OPTION = typer.Option(
    None,
    "--max-align",
    help="Maximum alignment to assume when calculating struct size [default: 8].",
)
_ROOT_OPTION = typer.Option(Path("."), "--root", help="Directory holding widecopy.toml.")
_CONFIG_OPTION = typer.Option(None, "--config", help="Explicit configuration file.")
_PACKAGE_OPTION = typer.Option(
    None,
    "--package",
    help="Only analyze units whose name matches this pattern ('...' is a wildcard).",
)
_FORMAT_IN_OPTION = typer.Option(
    None,
    "--format-in",
    help="Graph document format (json, toml); inferred from file suffixes by default.",
)
_VERBOSE_OPTION = typer.Option(False, "--verbose", "-v")


@app.command()
def check(
    paths: List[Path] = _PATHS_ARGUMENT,
    max_width: Optional[int] = _MAX_OPTION,
    word_size: Optional[int] = _WORD_SIZE_OPTION,
    max_align: Optional[int] = _MAX_ALIGN_OPTION,
    root: Path = _ROOT_OPTION,
    config: Optional[Path] = _CONFIG_OPTION,
    package: Optional[str] = _PACKAGE_OPTION,
    format_in: Optional[str] = _FORMAT_IN_OPTION,
    output: OutputFormat = typer.Option(OutputFormat.TEXT, "--output"),
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    """Report functions that copy wide structs at call boundaries.

    Exits 2 when any copy site is found, 1 when the graph cannot be loaded.
    """
    configure_logging(verbose=verbose)
    try:
        request = build_request(
            paths,
            root=root,
            config_path=config,
            max_width=max_width,
            word_size=word_size,
            max_align=max_align,
            package=package,
            format_in=format_in,
        )
        result = run_check(request)
    except WidecopyError as exc:
        raise _fail(exc)

    if output is OutputFormat.JSON:
        response = CheckResponseDTO.model_validate(report_payload(result.sites))
        typer.echo(json.dumps(response.model_dump(), indent=2, sort_keys=True))
    else:
        for line in report(result.sites):
            typer.echo(line)
    if result.has_findings:
        raise typer.Exit(code=EXIT_FINDINGS)


@app.command()
def sizes(
    paths: List[Path] = _PATHS_ARGUMENT,
    max_width: Optional[int] = _MAX_OPTION,
    word_size: Optional[int] = _WORD_SIZE_OPTION,
    max_align: Optional[int] = _MAX_ALIGN_OPTION,
    root: Path = _ROOT_OPTION,
    config: Optional[Path] = _CONFIG_OPTION,
    package: Optional[str] = _PACKAGE_OPTION,
    format_in: Optional[str] = _FORMAT_IN_OPTION,
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    """Print the footprint of every struct defined in the analyzed units."""
    configure_logging(verbose=verbose)
    try:
        request = build_request(
            paths,
            root=root,
            config_path=config,
            max_width=max_width,
            word_size=word_size,
            max_align=max_align,
            package=package,
            format_in=format_in,
        )
        rows = type_footprints(load_units(request), request.config)
    except WidecopyError as exc:
        raise _fail(exc)

    for row in rows:
        qualified = f"{row.unit}.{row.name}" if row.unit else row.name
        typer.echo(f"{qualified}\t{row.footprint}\t{'wide' if row.wide else '-'}")


def main() -> None:
    app(prog_name="widecopy")

"""Providers that read resolved graph documents written by an external front end.

A document holds one or more units. Each unit lists its own struct
definitions, the imported definitions its fields need for sizing, and every
function signature with its declaration position. Type references are
tagged by ``kind``; a ``primitive`` that only names a Go basic type gets its
size from :data:`widecopy.analysis.sizes.GO_BASIC_TYPES`.
"""

from __future__ import annotations

import json
import os
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from pydantic import ValidationError

from widecopy.analysis.model import (
    Array,
    Field,
    FunctionSignature,
    Named,
    Param,
    Pointer,
    Position,
    Primitive,
    ResolvedUnit,
    TypeDef,
    TypeRef,
)
from widecopy.analysis.sizes import GO_BASIC_TYPES
from widecopy.config import DEFAULT_CONFIG_NAME
from widecopy.exceptions import ResolutionFailure
from widecopy.json_types import JSONObject
from widecopy.logging import get_logger
from widecopy.schema import (
    ArrayRefDTO,
    FunctionDTO,
    GraphDocumentDTO,
    NamedRefDTO,
    ParamDTO,
    PointerRefDTO,
    PrimitiveRefDTO,
    TypeDefDTO,
    UnitDTO,
)

logger = get_logger("ingest")

_SKIPPED_DIR_NAMES = frozenset({"testdata"})
# Project configuration files share the .toml suffix with graph documents.
_SKIPPED_FILE_NAMES = frozenset({DEFAULT_CONFIG_NAME, "pyproject.toml"})


def _is_skipped_dir(name: str, exclude: frozenset[str]) -> bool:
    return (
        name.startswith(".")
        or name.startswith("_")
        or name in _SKIPPED_DIR_NAMES
        or name in exclude
    )


def iter_document_paths(
    paths: Iterable[Path],
    *,
    extensions: Sequence[str],
    exclude: Sequence[str] = (),
) -> list[Path]:
    """Expand input paths to graph documents, pruning hidden and excluded directories."""
    suffixes = {extension.lower() for extension in extensions}
    excluded = frozenset(exclude)
    out: list[Path] = []
    for path in paths:
        if path.is_dir():
            for root, dirnames, filenames in os.walk(path, topdown=True):
                dirnames[:] = sorted(d for d in dirnames if not _is_skipped_dir(d, excluded))
                for filename in sorted(filenames):
                    candidate = Path(root) / filename
                    if filename in _SKIPPED_FILE_NAMES:
                        continue
                    if candidate.suffix.lower() in suffixes:
                        out.append(candidate)
        elif path.exists():
            out.append(path)
        else:
            raise ResolutionFailure(f"unable to stat file {str(path)!r}: no such file or directory")
    return out


def _lower_ref(dto: object) -> TypeRef:
    if isinstance(dto, PrimitiveRefDTO):
        if dto.size is None and not dto.words:
            basic = GO_BASIC_TYPES.get(dto.name)
            if basic is None:
                raise ResolutionFailure(f"primitive {dto.name!r} has no size and is not a basic type")
            return basic
        return Primitive(dto.name, size=dto.size or 0, align=dto.align, words=dto.words)
    if isinstance(dto, NamedRefDTO):
        return Named(identity=dto.identity or dto.name, name=dto.name)
    if isinstance(dto, PointerRefDTO):
        target = _lower_ref(dto.target) if dto.target is not None else None
        return Pointer(target, name=dto.name)
    if isinstance(dto, ArrayRefDTO):
        return Array(_lower_ref(dto.elem), dto.length)
    raise ResolutionFailure(f"unsupported type reference: {dto!r}")


def _lower_typedef(dto: TypeDefDTO) -> TypeDef:
    return TypeDef(
        identity=dto.identity or dto.name,
        name=dto.name,
        fields=tuple(Field(field.name, _lower_ref(field.type)) for field in dto.fields),
    )


def _lower_param(dto: ParamDTO) -> Param:
    return Param(dto.name, _lower_ref(dto.type))


def _lower_function(dto: FunctionDTO) -> FunctionSignature:
    return FunctionSignature(
        name=dto.name,
        position=Position(dto.position.file, dto.position.line, dto.position.column),
        receiver=_lower_param(dto.receiver) if dto.receiver is not None else None,
        params=tuple(_lower_param(param) for param in dto.params),
        results=tuple(_lower_param(result) for result in dto.results),
        display=dto.display,
    )


def _by_value_refs(ref: TypeRef) -> Iterable[Named]:
    if isinstance(ref, Named):
        yield ref
    elif isinstance(ref, Array):
        yield from _by_value_refs(ref.elem)


def check_unit_graph(unit: ResolvedUnit) -> None:
    """Reject duplicate identities, unknown field types and by-value cycles."""
    label = unit.name or "<unnamed>"
    seen: set[str] = set()
    for typedef in (*unit.types, *unit.imported_types):
        if typedef.identity in seen:
            raise ResolutionFailure(f"unit {label}: duplicate type identity {typedef.identity!r}")
        seen.add(typedef.identity)

    index = unit.type_index()
    edges: dict[str, list[str]] = {}
    for identity, typedef in index.items():
        targets: list[str] = []
        for field in typedef.fields:
            for ref in _by_value_refs(field.type):
                if ref.identity not in index:
                    raise ResolutionFailure(
                        f"unit {label}: field {typedef.name}.{field.name or '_'}"
                        f" refers to unknown type {ref.name!r}"
                    )
                targets.append(ref.identity)
        edges[identity] = targets

    _check_acyclic(edges, index, label)


def _check_acyclic(
    edges: Mapping[str, list[str]],
    index: Mapping[str, TypeDef],
    label: str,
) -> None:
    done: set[str] = set()
    for start in sorted(edges):
        if start in done:
            continue
        # Iterative DFS; stack entries are (identity, next edge index).
        path: list[str] = []
        on_path: set[str] = set()
        stack: list[tuple[str, int]] = [(start, 0)]
        while stack:
            identity, position = stack.pop()
            if position == 0:
                path.append(identity)
                on_path.add(identity)
            targets = edges[identity]
            if position < len(targets):
                stack.append((identity, position + 1))
                target = targets[position]
                if target in on_path:
                    cycle = path[path.index(target):] + [target]
                    names = " -> ".join(index[item].name for item in cycle)
                    raise ResolutionFailure(
                        f"unit {label}: invalid recursive type {names}"
                    )
                if target not in done:
                    stack.append((target, 0))
            else:
                path.pop()
                on_path.discard(identity)
                done.add(identity)


def _lower_unit(dto: UnitDTO) -> ResolvedUnit:
    unit = ResolvedUnit(
        name=dto.name,
        types=tuple(_lower_typedef(typedef) for typedef in dto.types),
        signatures=tuple(_lower_function(function) for function in dto.functions),
        imported_types=tuple(_lower_typedef(typedef) for typedef in dto.imported_types),
    )
    check_unit_graph(unit)
    return unit


def _summarize_validation_error(exc: ValidationError) -> str:
    errors = exc.errors()
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"]) or "<document>"
    summary = f"{location}: {first['msg']}"
    if len(errors) > 1:
        summary += f" (and {len(errors) - 1} more)"
    return summary


def units_from_payload(payload: object, *, source: str) -> list[ResolvedUnit]:
    """Validate a decoded document and lower it into resolved units."""
    if isinstance(payload, dict) and "units" not in payload:
        payload = {"units": [payload]}
    try:
        document = GraphDocumentDTO.model_validate(payload)
    except ValidationError as exc:
        raise ResolutionFailure(
            f"invalid graph document {source}: {_summarize_validation_error(exc)}"
        ) from exc
    return [_lower_unit(unit) for unit in document.units]


class _DocumentProvider(ABC):
    format_id = ""
    file_extensions: tuple[str, ...] = ()

    def discover_files(
        self,
        paths: Sequence[Path],
        *,
        exclude: Sequence[str] = (),
    ) -> list[Path]:
        found = iter_document_paths(paths, extensions=self.file_extensions, exclude=exclude)
        if not found:
            rendered = ", ".join(str(path) for path in paths)
            raise ResolutionFailure(f"no {self.format_id} graph documents found in {rendered}")
        return found

    @abstractmethod
    def decode(self, text: str) -> JSONObject:
        """Parse document text; syntax errors surface as ``ValueError``."""

    def load_units(self, paths: Sequence[Path]) -> list[ResolvedUnit]:
        units: list[ResolvedUnit] = []
        for path in paths:
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise ResolutionFailure(f"unable to read {path}: {exc}") from exc
            try:
                payload = self.decode(text)
            except ValueError as exc:
                raise ResolutionFailure(f"unable to parse graph document {path}: {exc}") from exc
            loaded = units_from_payload(payload, source=str(path))
            logger.debug("loaded %d unit(s) from %s", len(loaded), path)
            units.extend(loaded)
        return units


class JsonGraphProvider(_DocumentProvider):
    format_id = "json"
    file_extensions = (".json",)

    def decode(self, text: str) -> JSONObject:
        return json.loads(text)


class TomlGraphProvider(_DocumentProvider):
    format_id = "toml"
    file_extensions = (".toml",)

    def decode(self, text: str) -> JSONObject:
        return tomllib.loads(text)

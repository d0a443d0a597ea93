from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, TypeAlias, Union


@dataclass(frozen=True)
class Primitive:
    """A type whose size is known without looking at other definitions.

    ``words`` > 0 makes the size platform dependent: ``words * word_size``
    bytes added to ``size``, aligned to the word size.
    """

    name: str
    size: int = 0
    align: int = 0
    words: int = 0


@dataclass(frozen=True)
class Named:
    identity: str
    name: str


@dataclass(frozen=True)
class Pointer:
    """Any indirect type: pointer, map, channel, function value.

    ``name`` overrides the rendered spelling (e.g. ``map[string]int``).
    """

    target: "TypeRef | None" = None
    name: str = ""


@dataclass(frozen=True)
class Array:
    elem: "TypeRef"
    length: int


TypeRef: TypeAlias = Union[Primitive, Named, Pointer, Array]


@dataclass(frozen=True)
class Field:
    name: str
    type: TypeRef


@dataclass(frozen=True)
class TypeDef:
    identity: str
    name: str
    fields: Tuple[Field, ...] = ()


@dataclass(frozen=True, order=True)
class Position:
    file: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Param:
    name: str
    type: TypeRef


@dataclass(frozen=True)
class FunctionSignature:
    name: str
    position: Position
    receiver: Param | None = None
    params: Tuple[Param, ...] = ()
    results: Tuple[Param, ...] = ()
    display: str = ""

    def describe(self) -> str:
        if self.display:
            return self.display
        parts = ["func "]
        if self.receiver is not None:
            parts.append(f"({_render_param(self.receiver)}) ")
        parts.append(self.name)
        parts.append("(" + ", ".join(_render_param(p) for p in self.params) + ")")
        if self.results:
            rendered = ", ".join(_render_param(r) for r in self.results)
            if len(self.results) == 1 and not self.results[0].name:
                parts.append(f" {rendered}")
            else:
                parts.append(f" ({rendered})")
        return "".join(parts)


@dataclass(frozen=True)
class CopySite:
    function: FunctionSignature
    should_be: Tuple[str, ...]


@dataclass(frozen=True)
class ResolvedUnit:
    """One independently analyzable unit (a package) of the resolved graph.

    ``types`` are the unit's own definitions and are the only candidates for
    classification; ``imported_types`` are only used to size nested fields.
    """

    name: str
    types: Tuple[TypeDef, ...] = ()
    signatures: Tuple[FunctionSignature, ...] = ()
    imported_types: Tuple[TypeDef, ...] = field(default=())

    def type_index(self) -> dict[str, TypeDef]:
        index = {typedef.identity: typedef for typedef in self.imported_types}
        index.update({typedef.identity: typedef for typedef in self.types})
        return index


def render_type(ref: TypeRef) -> str:
    if isinstance(ref, Primitive):
        return ref.name
    if isinstance(ref, Named):
        return ref.name
    if isinstance(ref, Pointer):
        if ref.name:
            return ref.name
        if ref.target is None:
            return "unsafe.Pointer"
        return "*" + render_type(ref.target)
    if isinstance(ref, Array):
        return f"[{ref.length}]{render_type(ref.elem)}"
    raise TypeError(f"unsupported type reference: {ref!r}")


def _render_param(param: Param) -> str:
    rendered = render_type(param.type)
    return f"{param.name} {rendered}" if param.name else rendered

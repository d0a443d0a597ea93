from __future__ import annotations

from widecopy.analysis.model import (
    Field,
    FunctionSignature,
    Named,
    Param,
    Pointer,
    Position,
    Primitive,
    TypeDef,
)


def prim(size: int, align: int = 0) -> Primitive:
    return Primitive(f"b{size}", size=size, align=align)


def struct(name: str, *sizes: int) -> TypeDef:
    """A struct whose fields are naturally aligned primitives of the given sizes."""
    return TypeDef(
        identity=name,
        name=name,
        fields=tuple(Field(f"f{index}", prim(size)) for index, size in enumerate(sizes)),
    )


def named(typedef: TypeDef) -> Named:
    return Named(typedef.identity, typedef.name)


def ptr(typedef: TypeDef) -> Pointer:
    return Pointer(named(typedef))


def signature(
    name: str,
    *,
    receiver: Param | None = None,
    params: tuple[Param, ...] = (),
    results: tuple[Param, ...] = (),
    position: Position | None = None,
) -> FunctionSignature:
    return FunctionSignature(
        name=name,
        position=position or Position("a.go", 1, 1),
        receiver=receiver,
        params=params,
        results=results,
    )


def _int64_field(name: str) -> dict[str, object]:
    return {"name": name, "type": {"kind": "primitive", "name": "int64"}}


def end_to_end_unit_payload(name: str = "example.com/shapes") -> dict[str, object]:
    big = {"kind": "named", "name": "Big"}
    bigger = {"kind": "named", "name": "Bigger"}
    return {
        "name": name,
        "types": [
            {"name": "Big", "fields": [_int64_field("a"), _int64_field("b")]},
            {
                "name": "Bigger",
                "fields": [_int64_field("a"), _int64_field("b"), _int64_field("c")],
            },
        ],
        "functions": [
            {
                "name": "M",
                "position": {"file": "shapes.go", "line": 12, "column": 1},
                "receiver": {"name": "b", "type": bigger},
                "params": [{"name": "x", "type": big}, {"name": "y", "type": bigger}],
                "results": [{"type": bigger}],
            },
            {
                "name": "N",
                "position": {"file": "shapes.go", "line": 20, "column": 1},
                "params": [{"name": "p", "type": {"kind": "pointer", "target": bigger}}],
            },
        ],
    }

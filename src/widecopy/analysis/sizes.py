"""Aggregate layout model.

Sizes follow the usual structure-layout rules: each field starts at an offset
rounded up to its alignment, and the aggregate is padded at the end to its own
alignment, which is the largest field alignment capped at ``max_align``.
Reference types always occupy one word and are never followed.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from widecopy.analysis.model import Array, Named, Pointer, Primitive, TypeDef, TypeRef
from widecopy.config import SizeConfig
from widecopy.exceptions import ResolutionFailure

# Go basic types. Word-relative entries scale with the configured word size.
GO_BASIC_TYPES: dict[str, Primitive] = {
    "bool": Primitive("bool", size=1),
    "int8": Primitive("int8", size=1),
    "uint8": Primitive("uint8", size=1),
    "byte": Primitive("byte", size=1),
    "int16": Primitive("int16", size=2),
    "uint16": Primitive("uint16", size=2),
    "int32": Primitive("int32", size=4),
    "uint32": Primitive("uint32", size=4),
    "rune": Primitive("rune", size=4),
    "float32": Primitive("float32", size=4),
    "int64": Primitive("int64", size=8),
    "uint64": Primitive("uint64", size=8),
    "float64": Primitive("float64", size=8),
    "complex64": Primitive("complex64", size=8, align=4),
    "complex128": Primitive("complex128", size=16, align=8),
    "int": Primitive("int", words=1),
    "uint": Primitive("uint", words=1),
    "uintptr": Primitive("uintptr", words=1),
    "string": Primitive("string", words=2),
    "error": Primitive("error", words=2),
    "any": Primitive("any", words=2),
    "interface{}": Primitive("interface{}", words=2),
}

SLICE_WORDS = 3


def align_up(offset: int, alignment: int) -> int:
    return (offset + alignment - 1) // alignment * alignment


class Sizes:
    """Footprint calculator for one unit under one configuration.

    Layouts are memoized by TypeDef identity for the lifetime of the object,
    which is a single analysis pass.
    """

    def __init__(self, config: SizeConfig, types: Mapping[str, TypeDef] | None = None) -> None:
        self.config = config
        self._types: dict[str, TypeDef] = dict(types or {})
        self._layouts: dict[str, tuple[int, int]] = {}

    def _cap(self, alignment: int) -> int:
        return max(1, min(alignment, self.config.max_align))

    def _lookup(self, ref: Named) -> TypeDef:
        typedef = self._types.get(ref.identity)
        if typedef is None:
            raise ResolutionFailure(f"unknown type {ref.name!r} ({ref.identity})")
        return typedef

    def sizeof(self, ref: TypeRef) -> int:
        if isinstance(ref, Primitive):
            return ref.size + ref.words * self.config.word_size
        if isinstance(ref, Pointer):
            return self.config.word_size
        if isinstance(ref, Named):
            return self._layout(self._lookup(ref))[0]
        if isinstance(ref, Array):
            if ref.length <= 0:
                return 0
            elem_size = self.sizeof(ref.elem)
            return align_up(elem_size, self.alignof(ref.elem)) * (ref.length - 1) + elem_size
        raise TypeError(f"unsupported type reference: {ref!r}")

    def alignof(self, ref: TypeRef) -> int:
        if isinstance(ref, Primitive):
            if ref.align:
                return self._cap(ref.align)
            if ref.words:
                return self._cap(self.config.word_size)
            return self._cap(ref.size)
        if isinstance(ref, Pointer):
            return self._cap(self.config.word_size)
        if isinstance(ref, Named):
            return self._layout(self._lookup(ref))[1]
        if isinstance(ref, Array):
            return self.alignof(ref.elem)
        raise TypeError(f"unsupported type reference: {ref!r}")

    def footprint(self, typedef: TypeDef) -> int:
        return self._layout(typedef)[0]

    def _unsized_dependency(self, typedef: TypeDef) -> TypeDef | None:
        for field in typedef.fields:
            ref = field.type
            while isinstance(ref, Array):
                ref = ref.elem
            if isinstance(ref, Named) and ref.identity not in self._layouts:
                return self._lookup(ref)
        return None

    def _layout(self, typedef: TypeDef) -> tuple[int, int]:
        cached = self._layouts.get(typedef.identity)
        if cached is not None:
            return cached
        # Depth-first over by-value dependencies with an explicit stack; a
        # definition is laid out once every definition it embeds has been.
        stack = [typedef]
        active = {typedef.identity}
        while stack:
            current = stack[-1]
            dependency = self._unsized_dependency(current)
            if dependency is None:
                self._layouts[current.identity] = self._field_layout(current)
                active.discard(current.identity)
                stack.pop()
                continue
            if dependency.identity in active:
                raise ResolutionFailure(
                    f"invalid recursive type {dependency.name!r}: contains itself by value"
                )
            active.add(dependency.identity)
            stack.append(dependency)
        return self._layouts[typedef.identity]

    def _field_layout(self, typedef: TypeDef) -> tuple[int, int]:
        offset = 0
        struct_align = 1
        for field in typedef.fields:
            field_align = self.alignof(field.type)
            offset = align_up(offset, field_align) + self.sizeof(field.type)
            struct_align = max(struct_align, field_align)
        struct_align = self._cap(struct_align)
        return align_up(offset, struct_align), struct_align


def footprint(
    typedef: TypeDef,
    config: SizeConfig,
    types: Iterable[TypeDef] = (),
) -> int:
    """Return the byte footprint of ``typedef``.

    ``types`` supplies the definitions that nested ``Named`` fields refer to.
    """
    index = {other.identity: other for other in types}
    index.setdefault(typedef.identity, typedef)
    return Sizes(config, index).footprint(typedef)

from __future__ import annotations

import pytest

from tests.graph_helpers import named, prim, ptr, struct
from widecopy.analysis.model import Array, Field, Named, Pointer, TypeDef
from widecopy.analysis.sizes import GO_BASIC_TYPES, Sizes, align_up, footprint
from widecopy.config import SizeConfig
from widecopy.exceptions import ResolutionFailure


def test_align_up() -> None:
    assert align_up(0, 8) == 0
    assert align_up(1, 8) == 8
    assert align_up(8, 8) == 8
    assert align_up(9, 4) == 12


def test_padding_between_fields() -> None:
    assert footprint(struct("P", 1, 8), SizeConfig()) == 16


def test_trailing_padding_to_struct_alignment() -> None:
    assert footprint(struct("T", 8, 1), SizeConfig()) == 16
    assert footprint(struct("U", 4, 2, 1), SizeConfig()) == 8


@pytest.mark.parametrize(
    "config",
    [SizeConfig(), SizeConfig(max_width=1, word_size=4, max_align=4), SizeConfig(word_size=2, max_align=1)],
)
def test_zero_field_struct_is_empty(config: SizeConfig) -> None:
    assert footprint(TypeDef("Empty", "Empty"), config) == 0


def test_max_align_caps_primitive_alignment() -> None:
    assert footprint(struct("P", 1, 8), SizeConfig(max_align=4)) == 12
    assert footprint(struct("P", 1, 8), SizeConfig(max_align=1)) == 9


def test_word_sized_fields_follow_word_size() -> None:
    typedef = TypeDef(
        "S",
        "S",
        (
            Field("name", GO_BASIC_TYPES["string"]),
            Field("n", GO_BASIC_TYPES["int"]),
            Field("flag", GO_BASIC_TYPES["bool"]),
        ),
    )
    assert footprint(typedef, SizeConfig()) == 32
    assert footprint(typedef, SizeConfig(word_size=4, max_align=4)) == 16


def test_pointer_is_one_word_regardless_of_target() -> None:
    huge = struct("Huge", *([8] * 32))
    holder = TypeDef("H", "H", (Field("p", ptr(huge)), Field("b", prim(1))))
    assert footprint(holder, SizeConfig(), types=[huge]) == 16
    assert footprint(holder, SizeConfig(word_size=4, max_align=4), types=[huge]) == 8


def test_pointer_does_not_recurse_into_unknown_target() -> None:
    holder = TypeDef("H", "H", (Field("p", Pointer(None, name="map[string]int")),))
    assert footprint(holder, SizeConfig()) == 8


def test_nested_struct_uses_its_alignment_and_size() -> None:
    inner = struct("Inner", 1, 4)
    outer = TypeDef(
        "Outer",
        "Outer",
        (Field("a", prim(1)), Field("in", named(inner)), Field("b", prim(1))),
    )
    # a@0, Inner aligned to 4 at 4..12, b@12, padded to 16.
    assert footprint(outer, SizeConfig(), types=[inner]) == 16


def test_complex_alignment_is_half_its_size() -> None:
    typedef = TypeDef(
        "C",
        "C",
        (Field("b", GO_BASIC_TYPES["byte"]), Field("c", GO_BASIC_TYPES["complex64"])),
    )
    assert footprint(typedef, SizeConfig()) == 12


def test_array_sizes() -> None:
    sizes = Sizes(SizeConfig())
    assert sizes.sizeof(Array(prim(8), 4)) == 32
    assert sizes.sizeof(Array(prim(8), 0)) == 0
    assert sizes.alignof(Array(prim(4), 3)) == 4

    odd = struct("Odd", 4, 1)
    sizes = Sizes(SizeConfig(), {odd.identity: odd})
    assert sizes.sizeof(Array(named(odd), 3)) == 24


class _CountingSizes(Sizes):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.lookups: list[str] = []

    def _lookup(self, ref: Named) -> TypeDef:
        self.lookups.append(ref.identity)
        return super()._lookup(ref)


def test_layouts_are_memoized_per_identity() -> None:
    inner = struct("Inner", 8, 8)
    outer = TypeDef("Outer", "Outer", (Field("a", named(inner)), Field("b", named(inner))))
    sizes = _CountingSizes(SizeConfig(), {inner.identity: inner, outer.identity: outer})
    assert sizes.footprint(outer) == 32
    assert set(sizes.lookups) == {"Inner"}

    seen = len(sizes.lookups)
    assert sizes.footprint(outer) == 32
    assert sizes.footprint(inner) == 16
    assert sizes.lookups[seen:] == []


def test_deep_by_value_chain_does_not_exhaust_the_stack() -> None:
    types = [struct("T0", 8)]
    for index in range(1, 600):
        types.append(TypeDef(f"T{index}", f"T{index}", (Field("x", named(types[-1])),)))
    assert footprint(types[-1], SizeConfig(), types=types) == 8


def test_unknown_named_reference_is_a_resolution_failure() -> None:
    orphan = TypeDef("O", "O", (Field("x", named(struct("Missing"))),))
    with pytest.raises(ResolutionFailure, match="unknown type 'Missing'"):
        footprint(orphan, SizeConfig())


def test_by_value_cycle_is_a_resolution_failure() -> None:
    cyclic = TypeDef("L", "L", (Field("next", prim(8)), Field("self", Named("L", "L"))))
    with pytest.raises(ResolutionFailure, match="recursive"):
        footprint(cyclic, SizeConfig(), types=[cyclic])

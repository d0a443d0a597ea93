from __future__ import annotations

from tests.graph_helpers import named, struct
from widecopy.analysis.classify import classify
from widecopy.analysis.model import Field, Named, TypeDef
from widecopy.analysis.sizes import Sizes
from widecopy.config import SizeConfig


def test_threshold_is_exclusive() -> None:
    exactly = struct("Exactly", 8, 8)
    above = struct("Above", 8, 8, 1)
    wide = classify([exactly, above], SizeConfig(max_width=16))
    assert wide == frozenset({"Above"})


def test_threshold_plus_one_is_wide() -> None:
    bytes17 = struct("Bytes17", *([1] * 17))
    bytes16 = struct("Bytes16", *([1] * 16))
    wide = classify([bytes16, bytes17], SizeConfig(max_width=16))
    assert "Bytes17" in wide
    assert "Bytes16" not in wide


def test_word_size_changes_classification() -> None:
    words = struct("Words", 8, 8, 8)
    assert classify([words], SizeConfig(max_width=16)) == frozenset({"Words"})
    assert classify([words], SizeConfig(max_width=24)) == frozenset()


def test_classify_reuses_given_sizes() -> None:
    inner = struct("Inner", 8, 8, 8)
    outer = TypeDef("Outer", "Outer", (Field("in", named(inner)),))
    lookups: list[str] = []

    class RecordingSizes(Sizes):
        def _lookup(self, ref: Named) -> TypeDef:
            lookups.append(ref.identity)
            return super()._lookup(ref)

    sizes = RecordingSizes(SizeConfig(), {inner.identity: inner, outer.identity: outer})
    assert classify([inner, outer], SizeConfig(), sizes=sizes) == frozenset({"Inner", "Outer"})
    assert lookups

    seen = len(lookups)
    assert sizes.footprint(outer) == 24
    assert len(lookups) == seen


def test_empty_input_has_no_wide_types() -> None:
    assert classify([], SizeConfig()) == frozenset()

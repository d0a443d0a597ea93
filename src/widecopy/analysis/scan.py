from __future__ import annotations

from typing import AbstractSet, Iterable, List

from widecopy.analysis.model import CopySite, FunctionSignature, Named, TypeRef


def is_wide_by_value(ref: TypeRef, wide: AbstractSet[str]) -> bool:
    """True for a direct occurrence of a wide named type.

    Pointers to wide types and arrays of them are not function-boundary
    copies of the struct itself.
    """
    return isinstance(ref, Named) and ref.identity in wide


def offending_positions(signature: FunctionSignature, wide: AbstractSet[str]) -> List[str]:
    should_be: List[str] = []
    if signature.receiver is not None and is_wide_by_value(signature.receiver.type, wide):
        should_be.append("receiver")
    for index, param in enumerate(signature.params):
        if is_wide_by_value(param.type, wide):
            parameter = f"parameter '{param.name}'" if param.name else "parameter"
            should_be.append(f"{parameter} at index {index}")
    for index, result in enumerate(signature.results):
        if is_wide_by_value(result.type, wide):
            should_be.append(f"return value '{result.type.name}' at index {index}")
    return should_be


def scan(
    signatures: Iterable[FunctionSignature],
    wide: AbstractSet[str],
) -> List[CopySite]:
    """Return one CopySite per signature that passes a wide type by value."""
    sites: List[CopySite] = []
    for signature in signatures:
        should_be = offending_positions(signature, wide)
        if should_be:
            sites.append(CopySite(function=signature, should_be=tuple(should_be)))
    return sites

from __future__ import annotations

from typing import Iterable

from widecopy.analysis.model import TypeDef
from widecopy.analysis.sizes import Sizes
from widecopy.config import SizeConfig


def classify(
    typedefs: Iterable[TypeDef],
    config: SizeConfig,
    *,
    sizes: Sizes | None = None,
) -> frozenset[str]:
    """Return the identities of types whose footprint exceeds ``config.max_width``.

    The comparison is strict: a type exactly at the threshold is not wide.
    """
    typedefs = list(typedefs)
    if sizes is None:
        sizes = Sizes(config, {typedef.identity: typedef for typedef in typedefs})
    return frozenset(
        typedef.identity
        for typedef in typedefs
        if sizes.footprint(typedef) > config.max_width
    )

# Drives the size model, classifier and scanner over resolved units.
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from widecopy.analysis.classify import classify
from widecopy.analysis.model import CopySite, ResolvedUnit
from widecopy.analysis.report import sort_sites
from widecopy.analysis.scan import scan
from widecopy.analysis.sizes import Sizes
from widecopy.config import SizeConfig
from widecopy.logging import get_logger

logger = get_logger("pipeline")


@dataclass(frozen=True)
class TypeFootprint:
    unit: str
    name: str
    identity: str
    footprint: int
    wide: bool


@dataclass(frozen=True)
class AnalysisResult:
    sites: Tuple[CopySite, ...] = ()
    unit_count: int = 0

    @property
    def has_findings(self) -> bool:
        return bool(self.sites)


def check_unit(unit: ResolvedUnit, config: SizeConfig) -> List[CopySite]:
    sizes = Sizes(config, unit.type_index())
    wide = classify(unit.types, config, sizes=sizes)
    sites = scan(unit.signatures, wide)
    logger.debug(
        "unit %s: %d types, %d wide, %d signatures, %d copy sites",
        unit.name or "<unnamed>",
        len(unit.types),
        len(wide),
        len(unit.signatures),
        len(sites),
    )
    return sites


def analyze_units(units: Iterable[ResolvedUnit], config: SizeConfig) -> AnalysisResult:
    """Check every unit and return the combined, position-sorted sites."""
    sites: List[CopySite] = []
    unit_count = 0
    for unit in units:
        unit_count += 1
        sites.extend(check_unit(unit, config))
    return AnalysisResult(sites=tuple(sort_sites(sites)), unit_count=unit_count)


def type_footprints(units: Iterable[ResolvedUnit], config: SizeConfig) -> List[TypeFootprint]:
    rows: List[TypeFootprint] = []
    for unit in units:
        sizes = Sizes(config, unit.type_index())
        for typedef in unit.types:
            size = sizes.footprint(typedef)
            rows.append(
                TypeFootprint(
                    unit=unit.name,
                    name=typedef.name,
                    identity=typedef.identity,
                    footprint=size,
                    wide=size > config.max_width,
                )
            )
    return sorted(rows, key=lambda row: (row.unit, row.name))

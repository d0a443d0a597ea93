"""Size model, classifier, scanner and reporter."""

from .classify import classify
from .model import (
    Array,
    CopySite,
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
from .pipeline import AnalysisResult, TypeFootprint, analyze_units, check_unit, type_footprints
from .report import report, report_payload, sentence, sort_sites
from .scan import scan
from .sizes import GO_BASIC_TYPES, Sizes, footprint

__all__ = [
    "AnalysisResult",
    "Array",
    "CopySite",
    "Field",
    "FunctionSignature",
    "GO_BASIC_TYPES",
    "Named",
    "Param",
    "Pointer",
    "Position",
    "Primitive",
    "ResolvedUnit",
    "Sizes",
    "TypeDef",
    "TypeFootprint",
    "TypeRef",
    "analyze_units",
    "check_unit",
    "classify",
    "footprint",
    "report",
    "report_payload",
    "scan",
    "sentence",
    "sort_sites",
    "type_footprints",
]

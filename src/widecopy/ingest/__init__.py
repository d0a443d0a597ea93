from widecopy.ingest.adapter_contract import TypeGraphProvider
from widecopy.ingest.document_provider import (
    JsonGraphProvider,
    TomlGraphProvider,
    check_unit_graph,
    iter_document_paths,
    units_from_payload,
)
from widecopy.ingest.packages import path_to_regexp, select_units


def resolve_provider(*, paths, format_id=None, default_format_id="json"):
    from widecopy.ingest.registry import resolve_provider as _resolve_provider

    return _resolve_provider(
        paths=paths,
        format_id=format_id,
        default_format_id=default_format_id,
    )


__all__ = [
    "JsonGraphProvider",
    "TomlGraphProvider",
    "TypeGraphProvider",
    "check_unit_graph",
    "iter_document_paths",
    "path_to_regexp",
    "resolve_provider",
    "select_units",
    "units_from_payload",
]

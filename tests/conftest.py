from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
for entry in (ROOT, ROOT / "src"):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))


import pytest

from tests.graph_helpers import end_to_end_unit_payload


@pytest.fixture
def write_graph_document():
    def _write(path: Path, *, units: list[dict[str, object]]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps({"units": units}, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        return path

    return _write


@pytest.fixture
def end_to_end_document(tmp_path: Path, write_graph_document) -> Path:
    return write_graph_document(
        tmp_path / "graph" / "example.json",
        units=[end_to_end_unit_payload()],
    )

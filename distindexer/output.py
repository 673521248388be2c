"""Output sinks — JSON array and tab-separated table of the index."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from distindexer.exceptions import OutputError
from distindexer.models import COMPONENTS, AggregateRecord

TAB_HEADER = ("version", "date", "files", *COMPONENTS)
PLACEHOLDER = "-"


def _cell(value: Any) -> str:
    if value is None or value is False or value == "":
        return PLACEHOLDER
    if value is True:
        return "true"
    return str(value)


def render_json(records: Sequence[AggregateRecord]) -> str:
    """One record per line inside a JSON array."""
    lines = [json.dumps(record.as_dict(), separators=(",", ":")) for record in records]
    body = ",\n".join(lines)
    return f"[\n{body}\n]\n" if lines else "[\n]\n"


def render_tab(records: Sequence[AggregateRecord]) -> str:
    rows = ["\t".join(TAB_HEADER)]
    for record in records:
        cells = [record.version, record.date, ",".join(record.files)]
        cells.extend(getattr(record, component) for component in COMPONENTS)
        rows.append("\t".join(_cell(cell) for cell in cells))
    return "\n".join(rows) + "\n"


def _write(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"can't write {path}: {exc}") from exc


def write_json(records: Sequence[AggregateRecord], path: Path) -> None:
    _write(path, render_json(records))


def write_tab(records: Sequence[AggregateRecord], path: Path) -> None:
    _write(path, render_tab(records))

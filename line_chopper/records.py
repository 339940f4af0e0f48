from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from .compiler import Pipeline
from .config import ChopperConfig


def apply(
    pipeline: Pipeline,
    line: str,
    config: Optional[ChopperConfig] = None,
    values: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Run every chopper over one line and return the field mapping.

    Keys appear in pipeline order. A mapping passed in as `values` is
    cleared first and reused.
    """
    if values is None:
        values = {}
    else:
        values.clear()

    cursor = 0
    for chopper in pipeline:
        cursor = chopper.apply(line, cursor, values, config)
    return values


def extract_records(
    pipeline: Pipeline,
    lines: Iterable[str],
    config: Optional[ChopperConfig] = None,
) -> Iterator[Dict[str, str]]:
    """Yield one fresh mapping per input line."""
    for line in lines:
        yield apply(pipeline, line, config)


def preview_records(
    pipeline: Pipeline,
    lines: Iterable[str],
    config: Optional[ChopperConfig] = None,
    limit: int = 3,
) -> List[Dict[str, str]]:
    rows: List[Dict[str, str]] = []
    for record in extract_records(pipeline, lines, config):
        rows.append(record)
        if len(rows) >= max(1, int(limit)):
            break
    return rows

"""Field-extraction operations applied to one input line.

Every chopper consumes text starting at the cursor, stores it under its
name (unless the name is '.'), and returns the new cursor. The cursor
never moves backwards and never passes the end of the line.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .config import DISCARD_NAME, ChopperConfig

DEFAULT_CONFIG = ChopperConfig()


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


@dataclass(frozen=True)
class Chopper:
    name: str

    def apply(
        self,
        line: str,
        cursor: int,
        values: Dict[str, str],
        config: Optional[ChopperConfig] = None,
    ) -> int:
        raise NotImplementedError

    def _store(self, values: Dict[str, str], text: str, config: Optional[ChopperConfig]) -> None:
        if self.name == DISCARD_NAME:
            return
        values[self.name] = (config or DEFAULT_CONFIG).text(text)


@dataclass(frozen=True)
class Absolute(Chopper):
    """Extract up to a fixed offset from the start of the line."""

    until: int = 0

    def apply(self, line, cursor, values, config=None):
        end = _clamp(self.until, cursor, len(line))
        self._store(values, line[cursor:end], config)
        return end


@dataclass(frozen=True)
class Relative(Chopper):
    """Extract a fixed number of characters from the cursor."""

    until: int = 0

    def apply(self, line, cursor, values, config=None):
        end = _clamp(cursor + self.until, cursor, len(line))
        self._store(values, line[cursor:end], config)
        return end


@dataclass(frozen=True)
class Delimited(Chopper):
    """Extract up to the next occurrence of a delimiter.

    An empty or missing delimiter takes the rest of the line. With
    skip_all set, repeated occurrences right after the first match are
    consumed as well.
    """

    until: str = ""
    skip_all: bool = False

    def apply(self, line, cursor, values, config=None):
        if not self.until:
            self._store(values, line[cursor:], config)
            return len(line)

        found = line.find(self.until, cursor)
        if found == -1:
            self._store(values, line[cursor:], config)
            return len(line)

        width = len(self.until)
        end = found + width
        if self.skip_all:
            while line.startswith(self.until, end):
                end += width

        self._store(values, line[cursor:found], config)
        return end


def make_delimited(name: str, until: str) -> Delimited:
    """Build a Delimited chopper, reading a trailing '*' as skip-all.

    An escaped '\\*' suffix is kept literally, backslash included.
    """
    skip_all = False
    if until.endswith('*') and not until.endswith('\\*'):
        until = until[:-1]
        skip_all = True
    return Delimited(name=name, until=until, skip_all=skip_all)

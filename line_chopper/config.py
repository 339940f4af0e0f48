from __future__ import annotations

from dataclasses import dataclass

DEFAULT_FIELD_SEPARATOR = " *"  # a run of spaces
DEFAULT_EXPRESSION = "all"
DEFAULT_TEMPLATE = "{{ .all }}"
JSON_OUTPUT = "json"
DISCARD_NAME = "."


@dataclass(frozen=True)
class ChopperConfig:
    trim: bool = True
    field_separator: str = DEFAULT_FIELD_SEPARATOR

    def text(self, value: str) -> str:
        """Post-process an extracted value (strip plain spaces unless disabled)."""
        if self.trim:
            return value.strip(' ')
        return value

from __future__ import annotations

import json
import re
from typing import Dict, List, Mapping, TextIO, Tuple, Union

MISSING_VALUE = "<no value>"

ACTION_OPEN = "{{"
ACTION_CLOSE = "}}"
FIELD_RE = re.compile(r'\s*\.([^\s{}]+)\s*')


class TemplateSyntaxError(ValueError):
    """Raised when an output template cannot be parsed."""


class FieldRef(str):
    """A `{{ .name }}` action inside a parsed template."""


Segment = Union[str, FieldRef]


class Template:
    """Output template made of literal text and `{{ .name }}` field actions.

    A field the line did not produce renders as '<no value>'.
    """

    def __init__(self, source: str):
        self.source = source
        self.segments: Tuple[Segment, ...] = tuple(parse_template(source))

    @property
    def fields(self) -> List[str]:
        return [str(s) for s in self.segments if isinstance(s, FieldRef)]

    def render(self, values: Mapping[str, str]) -> str:
        out: List[str] = []
        for segment in self.segments:
            if isinstance(segment, FieldRef):
                out.append(values.get(str(segment), MISSING_VALUE))
            else:
                out.append(segment)
        return ''.join(out)

    def __repr__(self):
        return f"Template({self.source!r})"


def parse_template(source: str) -> List[Segment]:
    segments: List[Segment] = []
    pos = 0
    while True:
        start = source.find(ACTION_OPEN, pos)
        if start == -1:
            if pos < len(source):
                segments.append(source[pos:])
            return segments

        if start > pos:
            segments.append(source[pos:start])

        end = source.find(ACTION_CLOSE, start + len(ACTION_OPEN))
        if end == -1:
            raise TemplateSyntaxError(f"unclosed action at offset {start}")

        body = source[start + len(ACTION_OPEN):end]
        match = FIELD_RE.fullmatch(body)
        if not match:
            raise TemplateSyntaxError(
                f"unsupported action {ACTION_OPEN}{body}{ACTION_CLOSE} at offset {start}; "
                f"expected {ACTION_OPEN} .name {ACTION_CLOSE}"
            )
        segments.append(FieldRef(match.group(1)))
        pos = end + len(ACTION_CLOSE)


def dump_record(values: Dict[str, str]) -> str:
    """Compact JSON object for one record, keys in extraction order."""
    return json.dumps(values, ensure_ascii=False, separators=(',', ':'))


class JsonArrayWriter:
    """Stream records to `out` as one JSON array, one object per line."""

    def __init__(self, out: TextIO):
        self.out = out
        self.count = 0
        self.closed = False
        self.out.write("[\n")

    def write(self, values: Dict[str, str]) -> None:
        if self.count > 0:
            self.out.write(",\n")
        self.out.write(f"  {dump_record(values)}")
        self.count += 1

    def close(self) -> None:
        if self.closed:
            return
        self.out.write("\n]\n")
        self.closed = True


class TemplateWriter:
    """Render each record through a Template, one output line per record."""

    def __init__(self, out: TextIO, template: Template, newline: bool = True):
        self.out = out
        self.template = template
        self.newline = newline
        self.count = 0

    def write(self, values: Dict[str, str]) -> None:
        self.out.write(self.template.render(values))
        if self.newline:
            self.out.write("\n")
        self.count += 1

    def close(self) -> None:
        pass


def render_text(records, template: Template, newline: bool = True) -> str:
    end = "\n" if newline else ""
    return ''.join(template.render(r) + end for r in records)


def render_json(records) -> str:
    body = ",\n".join(f"  {dump_record(r)}" for r in records)
    return f"[\n{body}\n]\n"

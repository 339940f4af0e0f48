from __future__ import annotations

import io
import sys
from contextlib import contextmanager
from typing import Iterator, List, Optional, TextIO

ENCODING = 'utf-8'
ERRORS = 'replace'
# Lines end at '\n' only; a lone '\r' stays part of the line.
NEWLINE = '\n'


def strip_terminator(line: str) -> str:
    """Drop one trailing '\\n', then one trailing '\\r'."""
    if line.endswith('\n'):
        line = line[:-1]
    if line.endswith('\r'):
        line = line[:-1]
    return line


def iter_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines without their line terminator."""
    for line in stream:
        yield strip_terminator(line)


def split_lines(text: str) -> List[str]:
    """Split pasted text exactly the way input files are split."""
    return list(iter_lines(io.StringIO(text or '', newline=NEWLINE)))


@contextmanager
def open_input(path: Optional[str] = None) -> Iterator[TextIO]:
    """Open a file path for reading, or fall back to stdin for None or '-'.

    Both sources use the same decoding and line splitting.
    """
    if path not in (None, '', '-'):
        with open(path, 'r', encoding=ENCODING, errors=ERRORS, newline=NEWLINE) as f:
            yield f
        return

    buffer = getattr(sys.stdin, 'buffer', None)
    if buffer is None:
        yield sys.stdin
        return

    stream = io.TextIOWrapper(buffer, encoding=ENCODING, errors=ERRORS, newline=NEWLINE)
    try:
        yield stream
    finally:
        # Leave sys.stdin usable; closing the wrapper would close its buffer.
        stream.detach()


def read_text_lines(file_obj=None, text: Optional[str] = None) -> List[str]:
    """Read lines from an uploaded file, a file path, or pasted text."""
    if file_obj is None:
        if text is None:
            raise ValueError("No file uploaded.")
        return split_lines(text)

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode(ENCODING, errors=ERRORS)
        return split_lines(content)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding=ENCODING, errors=ERRORS, newline=NEWLINE) as f:
        return list(iter_lines(f))

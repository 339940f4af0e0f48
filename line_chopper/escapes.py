from __future__ import annotations

from typing import List

SIMPLE_ESCAPES = {
    'a': '\a',
    'b': '\b',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
    'v': '\v',
    '\\': '\\',
    '"': '"',
}

HEX_ESCAPES = {'x': 2, 'u': 4, 'U': 8}
OCT_DIGITS = '01234567'
HEX_DIGITS = '0123456789abcdefABCDEF'


class EscapeError(ValueError):
    """Raised when a backslash escape cannot be decoded."""


def unescape(text: str) -> str:
    """Decode backslash escapes the way a double-quoted string literal would.

    - Single-character escapes: \\a \\b \\f \\n \\r \\t \\v \\\\ \\"
    - \\xHH, \\uHHHH and \\UHHHHHHHH code points
    - \\ooo three-digit octal values up to \\377

    Unknown escapes and a trailing backslash raise EscapeError.
    """
    if text is None:
        return ''

    out: List[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != '\\':
            out.append(ch)
            i += 1
            continue

        if i + 1 >= len(text):
            raise EscapeError(f"trailing backslash at offset {i}")

        code = text[i + 1]
        if code in SIMPLE_ESCAPES:
            out.append(SIMPLE_ESCAPES[code])
            i += 2
        elif code in HEX_ESCAPES:
            width = HEX_ESCAPES[code]
            digits = text[i + 2:i + 2 + width]
            if len(digits) != width or any(d not in HEX_DIGITS for d in digits):
                raise EscapeError(f"invalid \\{code} escape at offset {i}")
            value = int(digits, 16)
            if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
                raise EscapeError(f"invalid code point \\{code}{digits}")
            out.append(chr(value))
            i += 2 + width
        elif code in OCT_DIGITS:
            digits = text[i + 1:i + 4]
            if len(digits) != 3 or any(d not in OCT_DIGITS for d in digits):
                raise EscapeError(f"invalid octal escape at offset {i}")
            value = int(digits, 8)
            if value > 0o377:
                raise EscapeError(f"octal escape out of range: \\{digits}")
            out.append(chr(value))
            i += 4
        else:
            raise EscapeError(f"unknown escape sequence \\{code}")

    return ''.join(out)

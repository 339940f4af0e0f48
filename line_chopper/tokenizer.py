from __future__ import annotations

from typing import Iterator

QUOTES = ('"', "'")


def tokenize(text: str) -> Iterator[str]:
    """Split a parse expression into whitespace-separated tokens.

    Text inside single or double quotes is kept as one token, quotes
    included, so a quoted delimiter may contain spaces. An unterminated
    quote yields the opening quote plus the rest of the input.
    """
    if not text:
        return

    i = 0
    n = len(text)
    while i < n:
        while i < n and text[i].isspace():
            i += 1
        if i >= n:
            return

        start = i
        ch = text[i]
        if ch in QUOTES:
            close = text.find(ch, i + 1)
            if close == -1:
                # Nothing after a lone opening quote: no token.
                if n > i + 1:
                    yield text[start:]
                return
            yield text[start:close + 1]
            i = close + 1
            continue

        while i < n and not text[i].isspace():
            i += 1
        yield text[start:i]


def is_quoted(token: str) -> bool:
    """True when the token is wrapped in a matching pair of quotes."""
    return len(token) >= 2 and token[0] in QUOTES and token[-1] == token[0]

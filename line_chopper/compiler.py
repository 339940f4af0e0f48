from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, List, Optional, Tuple

from .choppers import Absolute, Chopper, Relative, make_delimited
from .config import ChopperConfig
from .tokenizer import is_quoted, tokenize

logger = logging.getLogger(__name__)

Pipeline = Tuple[Chopper, ...]

NUMBER_RE = re.compile(r'[+-]?[0-9]+')


def _classify(name: str, terminator: str, config: ChopperConfig) -> Tuple[Chopper, Optional[str]]:
    """Resolve one (name, terminator) pair.

    Returns the chopper and the name carried into the next step (a bare
    word terminator is itself the next field name).
    """
    if NUMBER_RE.fullmatch(terminator):
        offset = int(terminator)
        if terminator[0] in '+-':
            return Relative(name=name, until=offset), None
        return Absolute(name=name, until=offset), None

    if is_quoted(terminator):
        return make_delimited(name, terminator[1:-1]), None

    return make_delimited(name, config.field_separator), terminator


def compile_tokens(tokens: Iterable[str], config: Optional[ChopperConfig] = None) -> Pipeline:
    config = config or ChopperConfig()
    stream: Iterator[str] = iter(tokens)
    choppers: List[Chopper] = []
    pending: Optional[str] = None

    while True:
        name = pending if pending is not None else next(stream, None)
        if name is None:
            break

        terminator = next(stream, None)
        if terminator is None:
            # Last name takes whatever is left on the line.
            choppers.append(make_delimited(name, ''))
            break

        chopper, pending = _classify(name, terminator, config)
        choppers.append(chopper)

    return tuple(choppers)


def compile_expression(expression: str, config: Optional[ChopperConfig] = None) -> Pipeline:
    """Compile a parse expression into an immutable chopper pipeline.

    The expression alternates field names with terminators: an unsigned
    integer (absolute offset), a signed integer (relative offset), a quoted
    delimiter, or another name (split on the default field separator).
    """
    pipeline = compile_tokens(tokenize(expression), config)
    logger.debug("Compiled %r into %d choppers: %s", expression, len(pipeline), pipeline)
    return pipeline

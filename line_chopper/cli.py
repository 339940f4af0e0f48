from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, TextIO

from .compiler import compile_expression
from .config import (
    DEFAULT_EXPRESSION,
    DEFAULT_FIELD_SEPARATOR,
    DEFAULT_TEMPLATE,
    JSON_OUTPUT,
    ChopperConfig,
)
from .escapes import EscapeError, unescape
from .io_utils import iter_lines, open_input
from .records import apply
from .rendering import JsonArrayWriter, Template, TemplateSyntaxError, TemplateWriter

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="line-chopper",
        description="Slice each input line into named fields and print them as text or JSON.",
    )
    parser.add_argument(
        "-p", "--parse",
        default=DEFAULT_EXPRESSION,
        help="The parse expression, e.g. 'date 10 level \" \" msg'.",
    )
    parser.add_argument(
        "-o", "--output",
        default=DEFAULT_TEMPLATE,
        help=(
            "The output expression. Either 'json' to print an array of JSON objects, "
            "or a template such as '{{ .name }}' used to format each line."
        ),
    )
    parser.add_argument(
        "-t", "--no-trim",
        action="store_true",
        help="Do not trim spaces from the start and end of parsed values.",
    )
    parser.add_argument(
        "-d", "--delimiter",
        default=DEFAULT_FIELD_SEPARATOR,
        help="The default field delimiter used between adjacent names.",
    )
    parser.add_argument(
        "-n", "--no-newline",
        action="store_true",
        help="Do not emit a newline at the end of each output line.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Shortcut for --log-level DEBUG.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...). Defaults to WARNING.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Input file. Reads from stdin if omitted or '-'.",
    )
    return parser


def run(args: argparse.Namespace, out: TextIO) -> int:
    """Compile the expression and stream every input line through it."""
    if args.output == JSON_OUTPUT:
        template = None
    else:
        template = Template(args.output)

    expression = unescape(args.parse)
    config = ChopperConfig(trim=not args.no_trim, field_separator=args.delimiter)
    pipeline = compile_expression(expression, config)

    with open_input(args.file) as stream:
        logger.debug("Reading from %s", args.file or "stdin")
        if template is None:
            writer = JsonArrayWriter(out)
        else:
            writer = TemplateWriter(out, template, newline=not args.no_newline)

        values = {}
        try:
            for line in iter_lines(stream):
                writer.write(apply(pipeline, line, config, values))
        finally:
            writer.close()

    logger.debug("Processed %d lines", writer.count)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else argv
    if not any(arg.startswith("-") and arg != "-" for arg in argv):
        parser.print_usage(sys.stderr)
        return 1

    args = parser.parse_args(argv)

    level_name = "DEBUG" if args.verbose else (args.log_level or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    program_name = os.path.basename(parser.prog)
    try:
        return run(args, sys.stdout)
    except (EscapeError, TemplateSyntaxError) as e:
        print(f"{program_name}: {e}", file=sys.stderr)
    except OSError as e:
        if e.filename is None:
            print(f"{program_name}: {e}", file=sys.stderr)
        else:
            print(f"{program_name}: '{e.filename}': {e.strerror}", file=sys.stderr)
    except Exception as e:
        logger.debug("Aborted while processing input", exc_info=True)
        print(f"{program_name}: {e}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())

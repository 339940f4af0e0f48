import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def chop():
    """Compile an expression and apply it to a single line."""
    from line_chopper.compiler import compile_expression
    from line_chopper.records import apply

    def _chop(expression, line, config=None):
        return apply(compile_expression(expression, config), line, config)

    return _chop

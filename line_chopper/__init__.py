"""Core logic for Line Chopper.

The Gradio UI lives in `app.py` and the command-line program in
`line_chopper.cli`. This package contains pure functions that:
- tokenize and compile a parse expression into choppers
- apply the choppers to each line to build a field mapping
- render field mappings through a template or as JSON
"""
from .compiler import compile_expression
from .config import ChopperConfig
from .records import apply, extract_records

__all__ = ["ChopperConfig", "apply", "compile_expression", "extract_records"]

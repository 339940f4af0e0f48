from __future__ import annotations

import logging
import os
import tempfile
from typing import List, Optional

import gradio as gr

from .compiler import compile_expression
from .config import DEFAULT_FIELD_SEPARATOR, JSON_OUTPUT, ChopperConfig
from .escapes import unescape
from .io_utils import read_text_lines, split_lines
from .records import extract_records, preview_records
from .rendering import Template, render_json, render_text

logger = logging.getLogger(__name__)


def build_pipeline(expression, output, no_trim=False, delimiter=None):
    """Compile UI inputs; raises ValueError on a bad expression or template."""
    template = None if (output or "").strip() == JSON_OUTPUT else Template(output or "")
    config = ChopperConfig(
        trim=not no_trim,
        field_separator=delimiter if delimiter else DEFAULT_FIELD_SEPARATOR,
    )
    pipeline = compile_expression(unescape(expression or ""), config)
    return pipeline, config, template


def load_text_handler(file_obj):
    if file_obj is None:
        return gr.update(), "No file uploaded.", ""

    try:
        lines = read_text_lines(file_obj)
    except (OSError, UnicodeError) as e:
        return gr.update(), f"Error reading file: {str(e)}", ""

    return gr.update(value="\n".join(lines)), f"Successfully loaded {len(lines)} lines.", compute_line_count_text(lines)


def compute_line_count_text(lines: Optional[List[str]]) -> str:
    if not lines:
        return ""
    return f"Lines: {len(lines)}"


def describe_pipeline_handler(expression, output, no_trim=False, delimiter=None):
    try:
        pipeline, _, _ = build_pipeline(expression, output, no_trim, delimiter)
    except ValueError as e:
        return [], f"Error: {str(e)}"
    rows = [
        [type(c).__name__, c.name, repr(c.until), getattr(c, "skip_all", False)]
        for c in pipeline
    ]
    return rows, f"Compiled {len(rows)} choppers."


def preview_handler(text, expression, output, no_trim=False, delimiter=None, no_newline=False):
    if not text:
        return None, "", "No input text."

    try:
        pipeline, config, template = build_pipeline(expression, output, no_trim, delimiter)
    except ValueError as e:
        return None, "", f"Error: {str(e)}"

    lines = split_lines(text)
    rows = preview_records(pipeline, lines, config, limit=3)
    if template is None:
        rendered = render_json(rows)
    else:
        rendered = render_text(rows, template, newline=not no_newline)
    return rows if rows else None, rendered, f"Previewing {len(rows)} of {len(lines)} lines."


def export_data_handler(text, expression, output, no_trim=False, delimiter=None, no_newline=False, file_name=None):
    if not text:
        return None, "No input text."

    try:
        pipeline, config, template = build_pipeline(expression, output, no_trim, delimiter)
    except ValueError as e:
        return None, f"Error: {str(e)}"

    if not file_name or not file_name.strip():
        file_name = "output"

    ext = ".json" if template is None else ".txt"
    if not file_name.lower().endswith(ext):
        file_name += ext

    temp_dir = tempfile.gettempdir()
    path = os.path.join(temp_dir, file_name)

    records = extract_records(pipeline, split_lines(text), config)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            if template is None:
                f.write(render_json(records))
            else:
                f.write(render_text(records, template, newline=not no_newline))
    except OSError as e:
        return None, f"Error during export: {str(e)}"

    logger.info("Exported %s", path)
    return path, f"Export successful! Saved to {path}"

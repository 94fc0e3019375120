import logging

from . import descriptors, display, key, miniscript, options, result
from .result import (
    Outcome,
    Result,
    compact_expression,
    format_expression,
    layout,
    parse,
    parse_descriptor,
    parse_expression,
    render_tree,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "descriptors",
    "display",
    "key",
    "miniscript",
    "options",
    "result",
    "Outcome",
    "Result",
    "compact_expression",
    "format_expression",
    "layout",
    "parse",
    "parse_descriptor",
    "parse_expression",
    "render_tree",
]

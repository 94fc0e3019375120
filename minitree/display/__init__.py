from .formatting import compact, format_miniscript, format_policy, format_tokens
from .layout import PositionedNode, layout_tree
from .render import render_ascii, render_json
from .script import compact_script, format_script, simplify_asm

__all__ = [
    "PositionedNode",
    "compact",
    "compact_script",
    "format_miniscript",
    "format_policy",
    "format_script",
    "format_tokens",
    "layout_tree",
    "render_ascii",
    "render_json",
    "simplify_asm",
]

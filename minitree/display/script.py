"""
Reformat the ASM representation of a Bitcoin Script.
"""

import re

from minitree.options import INDENT

MAX_LINE_LENGTH = 80
# Shorter scripts are left on a single line.
MIN_FORMAT_LENGTH = 100

PUSH_OPS_RE = re.compile(r"OP_PUSHBYTES_\d+\s+|OP_PUSHDATA\d?\s+")
WHITESPACE_RE = re.compile(r"\s+")


def compact_script(script):
    """Put the whole Script on one line, opcodes separated by a single space."""
    return WHITESPACE_RE.sub(" ", script).strip()


def simplify_asm(script):
    """Drop the push opcodes in front of data pushes."""
    return compact_script(PUSH_OPS_RE.sub("", script))


class ScriptFormatter:
    """Accumulate opcodes into indented lines."""

    def __init__(self, indent=INDENT):
        self.indent = indent
        self.lines = []
        self.depth = 0
        self.current = []

    def line_length(self):
        return len(self.indent * self.depth) + len(" ".join(self.current))

    def break_line(self):
        if self.current:
            self.lines.append(self.indent * self.depth + " ".join(self.current))
            self.current = []

    def push(self, opcode):
        self.current.append(opcode)

    def result(self):
        self.break_line()
        return "\n".join(self.lines)


def format_script(script, indent=INDENT):
    """Indent the conditional blocks of a Script and wrap its long lines.

    Only OP_IF and OP_NOTIF open a block. OP_ELSE and OP_ENDIF go on their own line
    at the depth of the opcode that opened the block.
    """
    if not script or len(script) < MIN_FORMAT_LENGTH:
        return script

    opcodes = script.split()
    fmt = ScriptFormatter(indent)
    for i, opcode in enumerate(opcodes):
        prev_opcode = opcodes[i - 1] if i > 0 else None
        next_opcode = opcodes[i + 1] if i + 1 < len(opcodes) else None

        if opcode in ("OP_IF", "OP_NOTIF"):
            fmt.push(opcode)
            fmt.break_line()
            fmt.depth += 1

        elif opcode in ("OP_ELSE", "OP_ENDIF"):
            fmt.break_line()
            fmt.depth = max(fmt.depth - 1, 0)
            fmt.push(opcode)
            fmt.break_line()
            if opcode == "OP_ELSE":
                fmt.depth += 1

        else:
            # Break after a complete sequence, or when the line gets too long.
            should_break = fmt.depth > 0 and (
                fmt.line_length() + len(opcode) + 1 > MAX_LINE_LENGTH
                or prev_opcode == "OP_TOALTSTACK"
                or (
                    prev_opcode == "OP_CHECKSIG"
                    and next_opcode != "OP_TOALTSTACK"
                    and fmt.line_length() > 70
                )
            )
            if should_break:
                fmt.break_line()
            fmt.push(opcode)

    return fmt.result()

"""
Reformat Miniscript and Policy expressions on multiple lines, and back.
"""

import re

from minitree.miniscript.tokens import TokenKind, tokenize
from minitree.options import INDENT

# Fragments whose arguments go on their own lines.
MINISCRIPT_MULTILINE = {
    "and",
    "or",
    "thresh",
    "and_v",
    "and_b",
    "and_n",
    "or_b",
    "or_c",
    "or_d",
    "or_i",
    "andor",
}
POLICY_MULTILINE = {"and", "or", "thresh", "threshold"}

WHITESPACE_RE = re.compile(r"\s+")


def compact(expression):
    """Remove all whitespace from an expression."""
    return WHITESPACE_RE.sub("", expression)


def is_multiline(name, operators):
    """Whether {name}, possibly wrapped or weighted as in "t:or_c" or "9@and", is one of
    the {operators}."""
    return name.rsplit(":", 1)[-1].rsplit("@", 1)[-1] in operators


def format_tokens(tokens, operators, indent=INDENT):
    """Render a list of tokens with line breaks and indentation.

    :param operators: the names whose argument list starts on a new line.
    """
    result = ""
    depth = 0
    for i, token in enumerate(tokens):
        prev_token = tokens[i - 1] if i > 0 else None
        next_token = tokens[i + 1] if i + 1 < len(tokens) else None

        if token.kind == TokenKind.NAME:
            result += token.value

        elif token.kind == TokenKind.OPEN:
            result += token.value
            depth += 1
            # An empty argument list stays inline.
            if (
                prev_token is not None
                and prev_token.kind == TokenKind.NAME
                and is_multiline(prev_token.value, operators)
                and (next_token is None or next_token.kind != TokenKind.CLOSE)
            ):
                result += "\n" + indent * depth

        elif token.kind == TokenKind.CLOSE:
            depth -= 1
            if prev_token is not None and prev_token.kind == TokenKind.CLOSE:
                result += "\n" + indent * depth
            result += token.value

        else:
            assert token.kind == TokenKind.COMMA
            result += token.value
            if depth > 0 and next_token is not None:
                result += "\n" + indent * depth

    return result


def format_expression(expression, operators, indent=INDENT):
    if not expression:
        return expression
    return format_tokens(tokenize(compact(expression)), operators, indent)


def format_miniscript(expression, indent=INDENT):
    """Pretty-print a Miniscript expression."""
    return format_expression(expression, MINISCRIPT_MULTILINE, indent)


def format_policy(expression, indent=INDENT):
    """Pretty-print a Policy expression."""
    return format_expression(expression, POLICY_MULTILINE, indent)

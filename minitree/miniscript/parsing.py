"""
Utilities to parse Miniscript (and Policy) expressions from their string representation.

The parser is permissive: it checks the structure of the expression (brackets,
wrappers, argument lists) but not whether the fragments exist or type check.
"""

import re

from minitree.options import MAX_DEPTH
from minitree.utils.brackets import PARENS, find_top_level, is_balanced, split_top_level

from .errors import ErrorKind, MiniscriptParsingError
from .fragments import WRAPPERS
from .node import Fragment, Terminal, Weighted, Wrapper

WEIGHT_RE = re.compile(r"(\d+)@")
WRAPPER_RE = re.compile(r"([a-z]+):")
FRAGMENT_RE = re.compile(r"([a-z_][a-z0-9_]*)\(")

# Braces only belong to Taproot tree expressions.
BRACES = set("{}")


def check_depth(depth):
    if depth > MAX_DEPTH:
        raise MiniscriptParsingError(
            f"Expression is nested deeper than {MAX_DEPTH} levels",
            ErrorKind.TOO_DEEP,
        )


def parse_wrapper(expr, match, depth):
    """Parse a wrapper tag run and the expression it applies to."""
    tags, remaining = match.group(1), expr[match.end() :]
    for tag in tags:
        if tag not in WRAPPERS:
            raise MiniscriptParsingError(
                f"Unknown wrapper '{tag}' in '{tags}:'", ErrorKind.UNRECOGNIZED_WRAPPER
            )
    if len(remaining) == 0:
        raise MiniscriptParsingError(
            f"Wrapper '{tags}:' is not applied to anything", ErrorKind.DANGLING_WRAPPER
        )
    return Wrapper(tags, parse_node(remaining, depth + 1))


def parse_weight(expr, match, depth):
    """Parse a Policy probability weight and the branch it applies to."""
    weight, remaining = match.group(1), expr[match.end() :]
    if len(remaining) == 0:
        raise MiniscriptParsingError(
            f"Weight '{weight}@' is not applied to anything", ErrorKind.DANGLING_WRAPPER
        )
    return Weighted(weight, parse_node(remaining, depth + 1))


def parse_fragment(expr, match, depth):
    """Parse a "name(args)" expression spanning the whole of {expr}."""
    args = parse_arguments(expr[match.end() : -1], depth + 1)
    return Fragment(match.group(1), args)


def parse_arguments(args_str, depth=0):
    """Parse each top-level comma-separated argument of {args_str}, in order."""
    if len(args_str) == 0:
        return []

    args = []
    for arg in split_top_level(args_str, ",", PARENS):
        if len(arg) == 0:
            raise MiniscriptParsingError(
                f"Empty argument in '{args_str}'", ErrorKind.EMPTY_ARGUMENT
            )
        args.append(parse_node(arg, depth))
    return args


def parse_terminal(expr):
    """Anything that isn't a wrapper or a "name(args)" call is kept as is."""
    if not is_balanced(expr, PARENS):
        raise MiniscriptParsingError(
            f"Unbalanced parentheses in '{expr}'", ErrorKind.UNBALANCED_BRACKETS
        )
    if any(c in BRACES for c in expr) or find_top_level(expr, ",", PARENS) != -1:
        raise MiniscriptParsingError(
            f"Unexpected character in '{expr}'", ErrorKind.MALFORMED_EXPRESSION
        )
    return Terminal(expr)


def parse_node(expr, depth=0):
    """Read a node and its subs recursively from a string.

    :param depth: the nesting level of {expr}, used to bound the recursion.
    """
    check_depth(depth)
    if len(expr) == 0:
        raise MiniscriptParsingError("Empty expression", ErrorKind.EMPTY_ARGUMENT)

    match = WEIGHT_RE.match(expr)
    if match is not None:
        return parse_weight(expr, match, depth)

    match = WRAPPER_RE.match(expr)
    if match is not None:
        return parse_wrapper(expr, match, depth)

    # The parenthesis after the name must be closed by the last character.
    match = FRAGMENT_RE.match(expr)
    if (
        match is not None
        and find_top_level(expr, ")", PARENS, match.end()) == len(expr) - 1
    ):
        return parse_fragment(expr, match, depth)

    return parse_terminal(expr)


def miniscript_from_str(ms_str):
    """Construct a Miniscript expression tree from its string representation.

    The string is expected not to contain any whitespace.
    """
    assert isinstance(ms_str, str)
    if not is_balanced(ms_str, PARENS):
        raise MiniscriptParsingError(
            f"Unbalanced parentheses in '{ms_str}'", ErrorKind.UNBALANCED_BRACKETS
        )
    return parse_node(ms_str)

"""
The library boundary: every function here returns a Result and never raises on
malformed input, so it can be called on each keystroke of an editor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Mapping, Optional

from minitree.descriptors import DescriptorParsingError, parse_taproot_descriptor
from minitree.display import (
    compact,
    format_miniscript,
    format_policy,
    layout_tree,
    render_ascii,
    render_json,
)
from minitree.miniscript import MiniscriptParsingError, ParseError, miniscript_from_str
from minitree.options import RenderOptions

logger = logging.getLogger(__name__)


class Outcome(Enum):
    OK = auto()
    EMPTY = auto()
    ERROR = auto()


@dataclass(frozen=True)
class Result:
    """The value of an operation, or why there is none."""

    outcome: Outcome
    value: Any = None
    error: Optional[ParseError] = None

    @classmethod
    def ok(cls, value) -> Result:
        return cls(Outcome.OK, value=value)

    @classmethod
    def empty(cls) -> Result:
        return cls(Outcome.EMPTY)

    @classmethod
    def failure(cls, error: ParseError) -> Result:
        return cls(Outcome.ERROR, error=error)

    @property
    def is_ok(self) -> bool:
        return self.outcome == Outcome.OK

    @property
    def is_empty(self) -> bool:
        return self.outcome == Outcome.EMPTY

    @property
    def is_error(self) -> bool:
        return self.outcome == Outcome.ERROR


def is_taproot_descriptor(expression: str) -> bool:
    return compact(expression).startswith("tr(")


def _parse(expression: str, parser) -> Result:
    expression = compact(expression)
    if len(expression) == 0:
        return Result.empty()
    try:
        return Result.ok(parser(expression))
    except (MiniscriptParsingError, DescriptorParsingError) as e:
        logger.debug("Could not parse '%s': %s (%s)", expression, e.message, e.kind.name)
        return Result.failure(e.to_error())


def parse_expression(expression: str) -> Result:
    """Parse a Miniscript or Policy expression into its tree."""
    return _parse(expression, miniscript_from_str)


def parse_descriptor(descriptor: str, verify_checksum: bool = False) -> Result:
    """Parse a Taproot descriptor into its internal key and tree of leaves."""
    return _parse(
        descriptor, lambda d: parse_taproot_descriptor(d, verify_checksum=verify_checksum)
    )


def parse(expression: str) -> Result:
    """Parse either a Taproot descriptor or a Miniscript / Policy expression."""
    if is_taproot_descriptor(expression):
        return parse_descriptor(expression)
    return parse_expression(expression)


def format_expression(expression: str, policy: bool = False) -> Result:
    """Pretty-print an expression, using the Policy operators if {policy} is set."""
    if len(compact(expression)) == 0:
        return Result.empty()
    if policy:
        return Result.ok(format_policy(expression))
    return Result.ok(format_miniscript(expression))


def compact_expression(expression: str) -> Result:
    """Undo format_expression()."""
    expression = compact(expression)
    if len(expression) == 0:
        return Result.empty()
    return Result.ok(expression)


def layout(
    expression: str,
    substitutions: Optional[Mapping[str, str]] = None,
    options: Optional[RenderOptions] = None,
) -> Result:
    """Parse an expression and get its positioned tree."""
    parsed = parse(expression)
    if not parsed.is_ok:
        return parsed
    return Result.ok(layout_tree(parsed.value, substitutions, options))


def render_tree(
    expression: str,
    substitutions: Optional[Mapping[str, str]] = None,
    options: Optional[RenderOptions] = None,
    as_json: bool = False,
) -> Result:
    """Parse an expression and draw it as a tree diagram.

    :param substitutions: a read-only name to value mapping. Values are displayed
                          under their name.
    :param as_json: get the positioned tree as JSON rather than as a diagram.
    """
    options = options or RenderOptions()
    positioned = layout(expression, substitutions, options)
    if not positioned.is_ok:
        return positioned
    if as_json:
        return Result.ok(render_json(positioned.value))
    return Result.ok(render_ascii(positioned.value, options.margin))

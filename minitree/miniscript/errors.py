"""
All the exceptions raised when parsing Miniscript and Policy expressions.
"""

from dataclasses import dataclass
from enum import Enum, auto


class ErrorKind(Enum):
    UNBALANCED_BRACKETS = auto()
    DANGLING_WRAPPER = auto()
    UNRECOGNIZED_WRAPPER = auto()
    EMPTY_ARGUMENT = auto()
    MALFORMED_EXPRESSION = auto()
    INVALID_TREE = auto()
    INVALID_CHECKSUM = auto()
    TOO_DEEP = auto()


@dataclass(frozen=True)
class ParseError:
    """A parsing failure as a plain value, to be handed over to the caller."""

    kind: ErrorKind
    message: str

    def __str__(self):
        return self.message


class MiniscriptParsingError(ValueError):
    def __init__(self, message: str, kind: ErrorKind):
        super().__init__(message)
        self.message: str = message
        self.kind: ErrorKind = kind

    def to_error(self) -> ParseError:
        return ParseError(self.kind, self.message)

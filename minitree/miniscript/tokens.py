"""
Split an expression into names, parentheses and commas.
"""

from collections import namedtuple
from enum import Enum, auto


class TokenKind(Enum):
    NAME = auto()
    OPEN = auto()
    CLOSE = auto()
    COMMA = auto()


Token = namedtuple("Token", ["kind", "value"])

DELIMITERS = {
    "(": TokenKind.OPEN,
    ")": TokenKind.CLOSE,
    ",": TokenKind.COMMA,
}


def tokenize(expression):
    """Get the list of tokens of {expression}.

    Any run of characters other than '(', ')' and ',' is a single NAME token. Empty
    runs are dropped. Brackets are not checked for balance.
    """
    tokens = []
    name = ""
    for char in expression:
        kind = DELIMITERS.get(char)
        if kind is None:
            name += char
            continue
        if name:
            tokens.append(Token(TokenKind.NAME, name))
            name = ""
        tokens.append(Token(kind, char))
    if name:
        tokens.append(Token(TokenKind.NAME, name))
    return tokens

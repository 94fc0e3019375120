from . import errors, fragments, node, parsing, tokens
from .errors import ErrorKind, MiniscriptParsingError, ParseError
from .node import Fragment, Node, Terminal, Weighted, Wrapper
from .parsing import miniscript_from_str, parse_arguments, parse_node
from .tokens import Token, TokenKind, tokenize

__all__ = [
    "errors",
    "fragments",
    "node",
    "parsing",
    "tokens",
    "ErrorKind",
    "Fragment",
    "MiniscriptParsingError",
    "Node",
    "ParseError",
    "Terminal",
    "Token",
    "TokenKind",
    "Weighted",
    "Wrapper",
    "miniscript_from_str",
    "parse_arguments",
    "parse_node",
    "tokenize",
]

from minitree.miniscript.errors import ErrorKind, ParseError


class DescriptorParsingError(ValueError):
    """Error while parsing a Bitcoin Output Descriptor from its string representation"""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.MALFORMED_EXPRESSION):
        super().__init__(message)
        self.message: str = message
        self.kind: ErrorKind = kind

    def to_error(self) -> ParseError:
        return ParseError(self.kind, self.message)

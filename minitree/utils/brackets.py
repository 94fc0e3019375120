"""
Top-level delimiter search over bracketed strings.

A delimiter is "top-level" when it is found while the nesting depth of the
tracked bracket family is exactly zero.
"""

# Bracket families, as a mapping from opening to closing character.
PARENS = {"(": ")"}
PARENS_AND_BRACES = {"(": ")", "{": "}"}


def find_top_level(string, delimiter=",", brackets=PARENS, start=0):
    """Get the index of the first {delimiter} found at nesting depth zero.

    The delimiter is looked for before the depth is updated, so a closing bracket
    may be used as the delimiter to find the one matching an already-consumed
    opening bracket.

    :param brackets: the bracket family to track, see PARENS and PARENS_AND_BRACES.
    :param start: the index to start scanning from, at depth zero.
    :return: the index of the delimiter, or -1 if there is none.
    """
    closing = set(brackets.values())
    depth = 0
    for i in range(start, len(string)):
        char = string[i]
        if depth == 0 and char == delimiter:
            return i
        if char in brackets:
            depth += 1
        elif char in closing:
            depth -= 1
    return -1


def split_top_level(string, delimiter=",", brackets=PARENS):
    """Split {string} on each top-level {delimiter}.

    >>> split_top_level("a,(b,c),d")
    ['a', '(b,c)', 'd']
    """
    pieces = []
    start = 0
    while True:
        i = find_top_level(string, delimiter, brackets, start)
        if i == -1:
            pieces.append(string[start:])
            return pieces
        pieces.append(string[start:i])
        start = i + 1


def is_balanced(string, brackets=PARENS):
    """Whether every bracket of the family is closed, in order, by its pair."""
    closing = {c: o for o, c in brackets.items()}
    stack = []
    for char in string:
        if char in brackets:
            stack.append(char)
        elif char in closing:
            if not stack or stack.pop() != closing[char]:
                return False
    return not stack

from minitree.miniscript.errors import ErrorKind
from minitree.options import MAX_DEPTH
from minitree.utils.brackets import PARENS, PARENS_AND_BRACES, find_top_level, is_balanced

from .checksum import descsum_check
from .errors import DescriptorParsingError
from .utils import TaprootBranch, TaprootLeaf, TaprootRoot


def split_checksum(desc_str, verify=False):
    """Removes the checksum suffix of a descriptor, if any.

    :param verify: whether to check the checksum when there is one.
    """
    desc_split = desc_str.split("#")
    if len(desc_split) == 1:
        return desc_str
    if len(desc_split) != 2:
        raise DescriptorParsingError(f"Multiple checksums in '{desc_str}'")

    descriptor, checksum = desc_split
    if verify and not descsum_check(desc_str):
        raise DescriptorParsingError(
            f"Checksum '{checksum}' is invalid for '{descriptor}'",
            ErrorKind.INVALID_CHECKSUM,
        )

    return descriptor


def parse_two_part(descriptor, verify_checksum=False):
    """Split a Taproot descriptor into its internal key and its tree expression.

    The "tr(...)" wrapper and the checksum are optional.

    :return: a tuple (internal_key, tree_str), tree_str being None if there is no tree.
    """
    content = split_checksum(descriptor, verify=verify_checksum)
    if not is_balanced(content, PARENS_AND_BRACES):
        raise DescriptorParsingError(
            f"Unbalanced brackets in '{content}'", ErrorKind.UNBALANCED_BRACKETS
        )
    if content.startswith("tr("):
        # The closing parenthesis of "tr(" must end the descriptor.
        if find_top_level(content, ")", PARENS, 3) != len(content) - 1:
            raise DescriptorParsingError(
                f"Unexpected characters after the tr() expression in '{content}'"
            )
        content = content[3:-1]

    comma_index = find_top_level(content, ",", PARENS)
    if comma_index == -1:
        internal_key, tree_str = content, None
    else:
        internal_key, tree_str = content[:comma_index], content[comma_index + 1 :]

    if len(internal_key) == 0:
        raise DescriptorParsingError(
            f"Missing internal key in '{descriptor}'", ErrorKind.EMPTY_ARGUMENT
        )
    if tree_str is not None and len(tree_str) == 0:
        raise DescriptorParsingError(
            f"Missing tree expression after the internal key in '{descriptor}'",
            ErrorKind.EMPTY_ARGUMENT,
        )

    return internal_key, tree_str


def parse_leaf(leaf_str):
    """A leaf is any script expression, which can't contain a top-level branch."""
    if (
        "{" in leaf_str
        or "}" in leaf_str
        or find_top_level(leaf_str, ",", PARENS_AND_BRACES) != -1
    ):
        raise DescriptorParsingError(
            f"Invalid Taproot leaf '{leaf_str}'", ErrorKind.INVALID_TREE
        )
    return TaprootLeaf(leaf_str)


def parse_tree_inner(tree_str, depth):
    """Recursively called function to parse a tree expression."""
    if depth > MAX_DEPTH:
        raise DescriptorParsingError(
            f"Taproot tree is deeper than {MAX_DEPTH} levels", ErrorKind.TOO_DEEP
        )
    if len(tree_str) == 0:
        raise DescriptorParsingError(
            "Empty Taproot tree expression", ErrorKind.EMPTY_ARGUMENT
        )
    # (From BIP386)
    # A Tree Expression is:
    # - Any Script Expression that is allowed at the level this Tree Expression is in.
    # - A pair of Tree Expressions consisting of:
    #   - An open brace {
    #   - A Tree Expression
    #   - A comma ,
    #   - A Tree Expression
    #   - A closing brace }
    if tree_str[0] != "{":
        return parse_leaf(tree_str)
    if find_top_level(tree_str, "}", PARENS_AND_BRACES, 1) != len(tree_str) - 1:
        raise DescriptorParsingError(
            f"Invalid Taproot tree expression '{tree_str}'", ErrorKind.INVALID_TREE
        )

    inner = tree_str[1:-1]
    comma_index = find_top_level(inner, ",", PARENS_AND_BRACES)
    if comma_index == -1:
        return parse_tree_inner(inner, depth + 1)

    left, right = inner[:comma_index], inner[comma_index + 1 :]
    if len(left) == 0 or len(right) == 0:
        raise DescriptorParsingError(
            f"Missing Taproot tree branch in '{tree_str}'", ErrorKind.EMPTY_ARGUMENT
        )
    return TaprootBranch(
        parse_tree_inner(left, depth + 1), parse_tree_inner(right, depth + 1)
    )


def parse_bracket_tree(tree_str):
    """Parse a tree expression as defined in BIP386.

    Leaves are left unparsed, see TaprootLeaf.parse().
    """
    if not is_balanced(tree_str, PARENS_AND_BRACES):
        raise DescriptorParsingError(
            f"Unbalanced brackets in '{tree_str}'", ErrorKind.UNBALANCED_BRACKETS
        )
    return parse_tree_inner(tree_str, 0)


def parse_taproot_descriptor(descriptor, verify_checksum=False):
    """Parse a Taproot descriptor into its internal key and tree.

    :param verify_checksum: whether to check the checksum if there is one.
    """
    internal_key, tree_str = parse_two_part(descriptor, verify_checksum)
    tree = None
    if tree_str is not None:
        tree = parse_bracket_tree(tree_str)
    return TaprootRoot(internal_key, tree)

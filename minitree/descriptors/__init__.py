from .checksum import descsum_check, descsum_create
from .errors import DescriptorParsingError
from .parsing import (
    parse_bracket_tree,
    parse_taproot_descriptor,
    parse_two_part,
    split_checksum,
)
from .utils import NUMS_POINT, TaprootBranch, TaprootLeaf, TaprootRoot

__all__ = [
    "DescriptorParsingError",
    "NUMS_POINT",
    "TaprootBranch",
    "TaprootLeaf",
    "TaprootRoot",
    "descsum_check",
    "descsum_create",
    "parse_bracket_tree",
    "parse_taproot_descriptor",
    "parse_two_part",
    "split_checksum",
]

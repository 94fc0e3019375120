"""
Knobs for parsing, formatting and rendering.
"""

from dataclasses import dataclass

# Maximum nesting of wrappers, fragments and Taproot tree branches. This is also
# the maximum depth of a Taproot tree as per BIP341.
MAX_DEPTH = 128

# One level of indentation in pretty-printed expressions.
INDENT = "  "

# Minimum number of blank columns between two siblings in a tree diagram.
SIBLING_GAP = 4

# Blank columns allocated on the right of the widest node of a diagram.
GRID_MARGIN = 2


@dataclass(frozen=True)
class RenderOptions:
    """How to lay out and draw a tree diagram."""

    gap: int = SIBLING_GAP
    margin: int = GRID_MARGIN
    # Append the display note of known fragments to their label.
    annotate: bool = False
    # Parse Taproot leaf scripts and draw their own tree below the leaf.
    expand_leaves: bool = False
    # Shorten recognised keys in labels, and show the NUMS point as "NUMS".
    abbreviate_keys: bool = False

    def __post_init__(self):
        if self.gap < 1:
            raise ValueError(f"Invalid sibling gap: {self.gap}")
        if self.margin < 0:
            raise ValueError(f"Invalid grid margin: {self.margin}")

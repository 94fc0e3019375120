"""
Assign a row and a column to each node of an expression tree, for drawing it.

Labels follow a few rules:
- a fragment whose arguments are all terminals is a single node, "pk(A)";
- a threshold is labelled with its count, "thresh(2 of 3)", and has one child per branch;
- wrapper tags and Policy weights prefix the label of the node they apply to, "v:pk(A)"
  or "95@pk(A)", without adding a level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from minitree.descriptors.utils import NUMS_POINT, TaprootBranch, TaprootLeaf, TaprootRoot
from minitree.key import abbreviate_key, classify_key, replace_keys_with_names
from minitree.miniscript.errors import MiniscriptParsingError
from minitree.miniscript.node import Fragment, Node, Terminal, Weighted, Wrapper
from minitree.options import RenderOptions

BRANCH_LABEL = "branch"


@dataclass
class PositionedNode:
    """A node of the diagram: its label, its row (depth) and its starting column."""

    text: str
    depth: int
    position: int
    rightmost_extent: int
    children: List[PositionedNode] = field(default_factory=list)

    @property
    def center(self) -> int:
        """The column of the middle of the label, where connectors attach."""
        return self.position + (len(self.text) - 1) // 2

    def walk(self):
        """Iterate over this node and all its descendants, parents first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def max_depth(self) -> int:
        return max(n.depth for n in self.walk())


class Labeller:
    """Turn AST nodes into the label and children to display."""

    def __init__(self, substitutions: Optional[Mapping[str, str]], options: RenderOptions):
        self.substitutions = substitutions or {}
        self.options = options
        # Values are displayed under their name.
        self.names: Dict[str, str] = {v: k for k, v in self.substitutions.items()}

    def value(self, value: str) -> str:
        if value in self.names:
            return self.names[value]
        if self.options.abbreviate_keys:
            if value == NUMS_POINT:
                return "NUMS"
            if classify_key(value).is_key():
                return abbreviate_key(value)
        return value

    def fragment(self, node: Fragment) -> Tuple[str, List[Node]]:
        if node.is_threshold():
            label = f"{node.name}({self.value(node.k)} of {len(node.subs)})"
            children = node.subs
        elif all(isinstance(a, Terminal) for a in node.args):
            args = ",".join(self.value(a.value) for a in node.args)
            label, children = f"{node.name}({args})", []
        else:
            label, children = node.name, node.args

        if self.options.annotate and node.note is not None:
            label += f" [{node.note}]"
        return label, children

    def leaf(self, node: TaprootLeaf) -> Tuple[str, List[Node]]:
        if self.options.expand_leaves:
            try:
                return self.label(node.parse())
            except MiniscriptParsingError:
                # Unparsable leaves are shown as they were written.
                pass
        return replace_keys_with_names(node.script, self.substitutions), []

    def label(self, node: Node) -> Tuple[str, List[Node]]:
        """Get the text of {node} and the list of its children to display."""
        if isinstance(node, Terminal):
            return self.value(node.value), []
        if isinstance(node, Wrapper):
            label, children = self.label(node.child)
            return f"{node.tags}:{label}", children
        if isinstance(node, Weighted):
            label, children = self.label(node.child)
            return f"{node.weight}@{label}", children
        if isinstance(node, Fragment):
            return self.fragment(node)
        if isinstance(node, TaprootRoot):
            return f"tr({self.value(node.internal_key)})", node.children
        if isinstance(node, TaprootBranch):
            return BRANCH_LABEL, node.children
        if isinstance(node, TaprootLeaf):
            return self.leaf(node)
        raise TypeError(f"Cannot lay out a '{type(node).__name__}'")


def layout_node(
    node: Node, depth: int, position: int, labeller: Labeller
) -> PositionedNode:
    text, children = labeller.label(node)
    if not children:
        return PositionedNode(text, depth, position, position + len(text))

    placed = []
    next_position = position
    for child in children:
        positioned = layout_node(child, depth + 1, next_position, labeller)
        placed.append(positioned)
        next_position = positioned.rightmost_extent + labeller.options.gap

    # Centered over the children.
    own_position = (placed[0].position + placed[-1].position) // 2
    rightmost = max(own_position + len(text), placed[-1].rightmost_extent)
    return PositionedNode(text, depth, own_position, rightmost, placed)


def layout_tree(
    node: Node,
    substitutions: Optional[Mapping[str, str]] = None,
    options: Optional[RenderOptions] = None,
) -> PositionedNode:
    """Compute the position of every node of the tree rooted at {node}.

    :param substitutions: a read-only name to value mapping. Values are displayed
                          under their name.
    """
    labeller = Labeller(substitutions, options or RenderOptions())
    return layout_node(node, 0, 0, labeller)

"""Taproot trees, as found in tr() descriptors."""

from minitree.miniscript import Node, miniscript_from_str

# The standard "Nothing Up My Sleeve" point used as an internal key when spending
# through the key path must not be possible. See BIP341.
NUMS_POINT = "50929b74c1a04954b78b4b6035e97a5e078a5a0f28ec96d547bfee9ace803ac0"


class TaprootLeaf(Node):
    """A script in a Taproot tree, kept unparsed."""

    def __init__(self, script):
        assert isinstance(script, str) and len(script) > 0
        self.script = script

    def __repr__(self):
        return self.script

    def parse(self):
        """Parse the script of this leaf as a Miniscript expression."""
        return miniscript_from_str(self.script)

    def leaves(self):
        return [self]


class TaprootBranch(Node):
    """A node in a Taproot tree"""

    def __init__(self, left_child, right_child):
        """Instanciate a Taproot tree node with its two child. Each may be a leaf node."""
        assert all(
            isinstance(c, (TaprootBranch, TaprootLeaf)) for c in (left_child, right_child)
        )
        self.left_child = left_child
        self.right_child = right_child

    def __repr__(self):
        return f"{{{self.left_child},{self.right_child}}}"

    @property
    def children(self):
        return [self.left_child, self.right_child]

    def leaves(self):
        """Get the list of all the leaves, from left to right."""
        return self.left_child.leaves() + self.right_child.leaves()


class TaprootRoot(Node):
    """An internal key along with an optional tree of scripts."""

    def __init__(self, internal_key, tree=None):
        assert isinstance(internal_key, str) and len(internal_key) > 0
        assert tree is None or isinstance(tree, (TaprootBranch, TaprootLeaf))
        self.internal_key = internal_key
        self.tree = tree

    def __repr__(self):
        if self.tree is not None:
            return f"tr({self.internal_key},{self.tree})"
        return f"tr({self.internal_key})"

    @property
    def children(self):
        if self.tree is None:
            return []
        return [self.tree]

    def leaves(self):
        if self.tree is None:
            return []
        return self.tree.leaves()

    def leaf_depths(self):
        """Get a list of (leaf, depth) pairs, the depth being the length of the merkle proof."""
        if self.tree is None:
            return []
        pairs = []
        stack = [(self.tree, 0)]
        while stack:
            node, depth = stack.pop()
            if isinstance(node, TaprootLeaf):
                pairs.append((node, depth))
                continue
            # Right first so that leaves pop out from left to right.
            stack.append((node.right_child, depth + 1))
            stack.append((node.left_child, depth + 1))
        return pairs

    def branches(self):
        """Get the direct sub-trees of the root as (name, leaves) pairs.

        A tree made of a single leaf has a single "root" branch.
        """
        if self.tree is None:
            return []
        if isinstance(self.tree, TaprootLeaf):
            return [("root", [self.tree])]
        return [
            ("L", self.tree.left_child.leaves()),
            ("R", self.tree.right_child.leaves()),
        ]

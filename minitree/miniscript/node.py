"""
Miniscript AST elements.

The tree is purely syntactic: a node knows its text and its children, not its
Script semantics.
"""

from .fragments import COUNT_FIRST, fragment_note


class Node:
    """A node of an expression tree."""

    def __init__(self, *args, **kwargs):
        # Needs to be implemented by derived classes.
        raise NotImplementedError

    @property
    def children(self):
        """The sub-nodes of this node, in source order."""
        return []

    def __eq__(self, other):
        return type(self) is type(other) and repr(self) == repr(other)

    def __hash__(self):
        return hash((type(self).__name__, repr(self)))


class Terminal(Node):
    """A key name, a number, a hash or any other leaf value."""

    def __init__(self, value):
        assert isinstance(value, str) and len(value) > 0
        self.value = value

    def __repr__(self):
        return self.value


class Wrapper(Node):
    """One or more wrapper tags applied to a single sub-expression, as in "vc:pk_k(A)"."""

    def __init__(self, tags, child):
        assert isinstance(tags, str) and len(tags) > 0
        assert isinstance(child, Node)
        self.tags = tags
        self.child = child

    def __repr__(self):
        return f"{self.tags}:{self.child}"

    @property
    def children(self):
        return [self.child]


class Weighted(Node):
    """A Policy branch with its probability weight, as in "95@pk(A)"."""

    def __init__(self, weight, child):
        assert isinstance(weight, str) and weight.isdigit()
        assert isinstance(child, Node)
        self.weight = weight
        self.child = child

    def __repr__(self):
        return f"{self.weight}@{self.child}"

    @property
    def children(self):
        return [self.child]


class Fragment(Node):
    """A named fragment with its ordered arguments."""

    def __init__(self, name, args):
        assert isinstance(name, str) and len(name) > 0
        assert isinstance(args, list) and all(isinstance(a, Node) for a in args)
        self.name = name
        self.args = args

    def __repr__(self):
        return f"{self.name}({','.join(str(a) for a in self.args)})"

    @property
    def children(self):
        return self.args

    @property
    def note(self):
        return fragment_note(self.name)

    def is_threshold(self):
        """Whether the first argument is a count over the remaining, uniform, ones."""
        return (
            self.name in COUNT_FIRST
            and len(self.args) >= 2
            and isinstance(self.args[0], Terminal)
        )

    @property
    def k(self):
        """The threshold count, None if this isn't a threshold."""
        if not self.is_threshold():
            return None
        return self.args[0].value

    @property
    def subs(self):
        """The branches of a threshold, or all the arguments of any other fragment."""
        if self.is_threshold():
            return self.args[1:]
        return self.args

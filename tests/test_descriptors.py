import pytest

from minitree.descriptors import (
    DescriptorParsingError,
    TaprootBranch,
    TaprootLeaf,
    TaprootRoot,
    descsum_check,
    descsum_create,
    parse_bracket_tree,
    parse_taproot_descriptor,
    parse_two_part,
    split_checksum,
)
from minitree.descriptors.utils import NUMS_POINT
from minitree.miniscript import ErrorKind, Fragment, MiniscriptParsingError, Terminal
from minitree.options import MAX_DEPTH


def descriptor_error_kind(desc_str, **kwargs):
    with pytest.raises(DescriptorParsingError) as excinfo:
        parse_taproot_descriptor(desc_str, **kwargs)
    return excinfo.value.kind


def nested_tree(depth):
    """A tree with a leaf at {depth}, on the left-most path."""
    tree_str = "pk(A)"
    for _ in range(depth):
        tree_str = "{" + tree_str + ",pk(B)}"
    return tree_str


def test_checksum():
    """Sanity check the descriptor checksum."""
    assert descsum_create("raw(deadbeef)") == "raw(deadbeef)#89f8spxm"
    assert descsum_check("raw(deadbeef)#89f8spxm")
    assert not descsum_check("raw(deadbeef)#89f8spxx")
    assert not descsum_check("raw(deedbeef)#89f8spxm")
    assert not descsum_check("raw(deadbeef)#89f8spx")
    assert not descsum_check("raw(deadbeef)")
    assert descsum_check("raw(deadbeef)", require=False)

    desc = descsum_create(f"tr({NUMS_POINT},{{pk(A),pk(B)}})")
    assert descsum_check(desc)
    with pytest.raises(ValueError, match="Invalid character"):
        descsum_create("pk(é)")


def test_split_checksum():
    assert split_checksum("raw(deadbeef)#89f8spxm") == "raw(deadbeef)"
    assert split_checksum("raw(deadbeef)#89f8spxm", verify=True) == "raw(deadbeef)"
    assert split_checksum("raw(deadbeef)") == "raw(deadbeef)"
    # Only checked when asked to.
    assert split_checksum("raw(deadbeef)#aaaaaaaa") == "raw(deadbeef)"
    with pytest.raises(DescriptorParsingError, match="is invalid"):
        split_checksum("raw(deadbeef)#aaaaaaaa", verify=True)
    with pytest.raises(DescriptorParsingError, match="Multiple checksums"):
        split_checksum("raw(deadbeef)#89f8spxm#89f8spxm")


def test_two_part_split():
    """The internal key is separated from the tree on the first top-level comma."""
    assert parse_two_part("tr(K,{pk(A),pk(B)})") == ("K", "{pk(A),pk(B)}")
    assert parse_two_part("tr(K)") == ("K", None)
    # The tr() wrapper is optional.
    assert parse_two_part("K,pk(A)") == ("K", "pk(A)")
    assert parse_two_part("tr(musig(A,B),pk(C))") == ("musig(A,B)", "pk(C)")
    assert parse_two_part(descsum_create("tr(K,pk(A))"), verify_checksum=True) == (
        "K",
        "pk(A)",
    )

    with pytest.raises(DescriptorParsingError, match="Missing internal key") as excinfo:
        parse_two_part("tr(,pk(A))")
    assert excinfo.value.kind == ErrorKind.EMPTY_ARGUMENT
    with pytest.raises(DescriptorParsingError, match="Missing tree expression"):
        parse_two_part("tr(K,)")
    with pytest.raises(DescriptorParsingError, match="Unbalanced"):
        parse_two_part("tr(K,{pk(A),pk(B))")
    # The closing parenthesis must be the one of "tr(".
    for desc_str in ["tr(A),tr(B)", "tr(K,pk(A))pk(B)", "tr(A)(B)"]:
        with pytest.raises(
            DescriptorParsingError, match=r"after the tr\(\) expression"
        ) as excinfo:
            parse_two_part(desc_str)
        assert excinfo.value.kind == ErrorKind.MALFORMED_EXPRESSION
    assert descriptor_error_kind("tr(A),tr(B)") == ErrorKind.MALFORMED_EXPRESSION


def test_bracket_tree():
    """Parse tree expressions into branches and leaves."""
    tree = parse_bracket_tree("{{pk(A),pk(B)},pk(C)}")
    assert isinstance(tree, TaprootBranch)
    assert isinstance(tree.left_child, TaprootBranch)
    assert isinstance(tree.right_child, TaprootLeaf)
    assert [str(l) for l in tree.left_child.leaves()] == ["pk(A)", "pk(B)"]
    assert len(tree.leaves()) == 3
    assert str(tree) == "{{pk(A),pk(B)},pk(C)}"

    leaf = parse_bracket_tree("and_v(v:pk(A),older(144))")
    assert isinstance(leaf, TaprootLeaf)
    assert leaf.script == "and_v(v:pk(A),older(144))"
    # A single element within braces is the element itself.
    assert parse_bracket_tree("{pk(A)}") == TaprootLeaf("pk(A)")

    # Commas within a leaf script don't split the tree.
    tree = parse_bracket_tree("{multi_a(1,A,B),or_d(pk(C),pk(D))}")
    assert [l.script for l in tree.leaves()] == ["multi_a(1,A,B)", "or_d(pk(C),pk(D))"]

    for tree_str, kind in [
        ("pk(A),pk(B)", ErrorKind.INVALID_TREE),
        ("{pk(A),pk(B)}pk(C)", ErrorKind.INVALID_TREE),
        ("{pk(A),pk(B)},{pk(C),pk(D)}", ErrorKind.INVALID_TREE),
        ("{pk(A),pk(B),pk(C)}", ErrorKind.INVALID_TREE),
        ("{pk(A),}", ErrorKind.EMPTY_ARGUMENT),
        ("{,pk(A)}", ErrorKind.EMPTY_ARGUMENT),
        ("{}", ErrorKind.EMPTY_ARGUMENT),
        ("{pk(A),pk(B)", ErrorKind.UNBALANCED_BRACKETS),
        ("{pk(A),pk(B)}}", ErrorKind.UNBALANCED_BRACKETS),
    ]:
        with pytest.raises(DescriptorParsingError) as excinfo:
            parse_bracket_tree(tree_str)
        assert excinfo.value.kind == kind, tree_str


def test_taproot_descriptor():
    """Parse Taproot descriptors into their internal key and tree."""
    desc = parse_taproot_descriptor("tr(NUMS,{pk(A),pk(B)})")
    assert isinstance(desc, TaprootRoot)
    assert desc.internal_key == "NUMS"
    assert [l.script for l in desc.leaves()] == ["pk(A)", "pk(B)"]
    assert str(desc) == "tr(NUMS,{pk(A),pk(B)})"

    desc = parse_taproot_descriptor("tr(K)")
    assert desc.tree is None
    assert desc.children == []
    assert desc.leaves() == []
    assert desc.leaf_depths() == []
    assert desc.branches() == []
    assert str(desc) == "tr(K)"

    # The checksum is dropped, and only checked when asked.
    desc_str = descsum_create(f"tr({NUMS_POINT},pk(A))")
    desc = parse_taproot_descriptor(desc_str, verify_checksum=True)
    assert desc.internal_key == NUMS_POINT
    assert desc.tree == TaprootLeaf("pk(A)")
    bad_desc_str = desc_str[:-1] + ("q" if desc_str[-1] != "q" else "p")
    parse_taproot_descriptor(bad_desc_str)
    assert (
        descriptor_error_kind(bad_desc_str, verify_checksum=True)
        == ErrorKind.INVALID_CHECKSUM
    )

    assert descriptor_error_kind("tr(K,{pk(A),pk(B)}") == ErrorKind.UNBALANCED_BRACKETS
    assert descriptor_error_kind("tr(K,{pk(A),})") == ErrorKind.EMPTY_ARGUMENT
    assert descriptor_error_kind("tr(K,pk(A),pk(B))") == ErrorKind.INVALID_TREE


def test_leaf_parsing():
    """Leaves are kept as written until asked to be parsed."""
    desc = parse_taproot_descriptor("tr(K,{pk(A),and_v(v:pk(B),older(12))})")
    leaves = desc.leaves()
    assert leaves[0].parse() == Fragment("pk", [Terminal("A")])
    assert leaves[1].parse().name == "and_v"

    desc = parse_taproot_descriptor("tr(K,{pk(A),x:pk(B)})")
    with pytest.raises(MiniscriptParsingError, match="Unknown wrapper"):
        desc.leaves()[1].parse()


def test_tree_shape():
    """Leaf depths and the two top-level branches of a tree."""
    desc = parse_taproot_descriptor("tr(K,{{pk(A),pk(B)},{pk(C),{pk(D),pk(E)}}})")
    assert [(l.script, d) for l, d in desc.leaf_depths()] == [
        ("pk(A)", 2),
        ("pk(B)", 2),
        ("pk(C)", 2),
        ("pk(D)", 3),
        ("pk(E)", 3),
    ]
    branches = desc.branches()
    assert [name for name, _ in branches] == ["L", "R"]
    assert [l.script for l in branches[0][1]] == ["pk(A)", "pk(B)"]
    assert [l.script for l in branches[1][1]] == ["pk(C)", "pk(D)", "pk(E)"]

    desc = parse_taproot_descriptor("tr(K,pk(A))")
    assert [(l.script, d) for l, d in desc.leaf_depths()] == [("pk(A)", 0)]
    assert desc.branches() == [("root", [TaprootLeaf("pk(A)")])]


def test_tree_depth():
    """A tree may be at most as deep as a merkle proof can be long."""
    desc = parse_taproot_descriptor(f"tr(K,{nested_tree(100)})")
    depths = [d for _, d in desc.leaf_depths()]
    assert max(depths) == 100
    assert len(desc.leaves()) == 101

    parse_bracket_tree(nested_tree(MAX_DEPTH))
    with pytest.raises(DescriptorParsingError, match="deeper than") as excinfo:
        parse_bracket_tree(nested_tree(MAX_DEPTH + 1))
    assert excinfo.value.kind == ErrorKind.TOO_DEEP

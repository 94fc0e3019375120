import json
import logging

from minitree import (
    Outcome,
    Result,
    compact_expression,
    format_expression,
    layout,
    parse,
    parse_descriptor,
    parse_expression,
    render_tree,
)
from minitree.descriptors import TaprootRoot, descsum_create
from minitree.miniscript import ErrorKind, Fragment, ParseError, Terminal
from minitree.options import RenderOptions


def test_result():
    res = Result.ok(1)
    assert res.is_ok and not res.is_empty and not res.is_error
    assert res.outcome == Outcome.OK and res.value == 1 and res.error is None
    assert Result.empty().is_empty
    error = ParseError(ErrorKind.TOO_DEEP, "too deep")
    res = Result.failure(error)
    assert res.is_error and res.error == error and res.value is None
    assert str(error) == "too deep"


def test_parse():
    """Malformed input is reported as a value, never raised."""
    res = parse_expression("and(pk(A),pk(B))")
    assert res.is_ok
    assert res.value == Fragment(
        "and",
        [Fragment("pk", [Terminal("A")]), Fragment("pk", [Terminal("B")])],
    )
    # Whitespace is not significant.
    assert parse_expression(" and( pk(A),\n  pk(B) )\n").value == res.value

    for expression in ["", "   ", "\n\t"]:
        assert parse_expression(expression).is_empty
        assert parse(expression).is_empty
        assert parse_descriptor(expression).is_empty

    res = parse_expression("pk(A")
    assert res.is_error
    assert res.error.kind == ErrorKind.UNBALANCED_BRACKETS
    assert "pk(" in res.error.message
    assert parse_expression("v:").error.kind == ErrorKind.DANGLING_WRAPPER
    assert parse_expression("and(pk(A),)").error.kind == ErrorKind.EMPTY_ARGUMENT
    deep = "v:" * 1000 + "pk(A)"
    assert parse_expression(deep).error.kind == ErrorKind.TOO_DEEP


def test_parse_descriptor():
    res = parse("tr(NUMS,{pk(A),pk(B)})")
    assert res.is_ok
    assert isinstance(res.value, TaprootRoot)
    assert res.value.internal_key == "NUMS"
    assert [l.script for l in res.value.leaves()] == ["pk(A)", "pk(B)"]
    assert parse(" tr( K ,\n {pk(A), pk(B)})").value == TaprootRoot("K", res.value.tree)

    assert parse("tr(K,{pk(A),pk(B),pk(C)})").error.kind == ErrorKind.INVALID_TREE
    assert parse("tr(K,{pk(A),pk(B)}").error.kind == ErrorKind.UNBALANCED_BRACKETS
    res = parse_descriptor("tr(A),tr(B)")
    assert res.is_error
    assert res.error.kind == ErrorKind.MALFORMED_EXPRESSION

    desc = descsum_create("tr(K,pk(A))")
    assert parse_descriptor(desc, verify_checksum=True).is_ok
    bad = desc[:-1] + ("q" if desc[-1] != "q" else "p")
    res = parse_descriptor(bad, verify_checksum=True)
    assert res.error.kind == ErrorKind.INVALID_CHECKSUM
    # Not checked by default.
    assert parse(bad).is_ok


def test_format_and_compact():
    res = format_expression("and(pk(A),pk(B))", policy=True)
    assert res.value == "and(\n  pk(A),\n  pk(B)\n)"
    assert compact_expression(res.value).value == "and(pk(A),pk(B))"
    assert format_expression("and_v(v:pk(A),pk(B))").value == (
        "and_v(\n  v:pk(A),\n  pk(B)\n)"
    )
    assert format_expression(" \n").is_empty
    assert compact_expression(" \n").is_empty


def test_render_tree():
    res = render_tree("and(pk(A),pk(B))")
    assert res.value == "    and\n  ┌──┼─────┐\npk(A)    pk(B)"
    assert render_tree("").is_empty
    assert render_tree("pk(A").error.kind == ErrorKind.UNBALANCED_BRACKETS

    policy = "or(95@pk(Alice),and(thresh(2,pk(Bob),pk(Charlie),pk(Eva)),older(1008)))"
    res = render_tree(policy)
    assert res.is_ok
    assert "95@pk(Alice)" in res.value and "thresh(2 of 3)" in res.value
    assert format_expression(policy, policy=True).is_ok
    assert parse("Pk(A)").value == Terminal("Pk(A)")

    res = render_tree("and(pk(02aa),pk(B))", {"Alice": "02aa"}, as_json=True)
    tree = json.loads(res.value)
    assert [c["text"] for c in tree["children"]] == ["pk(Alice)", "pk(B)"]

    res = layout("tr(K,{pk(A),pk(B)})", options=RenderOptions(gap=1))
    assert [c.position for c in res.value.children[0].children] == [0, 6]
    assert layout("tr(K,{pk(A)").is_error


def test_parse_failure_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="minitree"):
        parse_expression("x:pk(A)")
    assert "UNRECOGNIZED_WRAPPER" in caplog.text

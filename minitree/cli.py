"""Command-line entry point to format and draw expressions."""

import argparse
import logging
import sys

from .options import RenderOptions
from .result import compact_expression, format_expression, render_tree


def parse_key(key_str):
    """Parse a NAME=VALUE key variable."""
    name, sep, value = key_str.partition("=")
    if not sep or not name or not value:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{key_str}'")
    return name, value


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="minitree",
        description="Format Miniscript and Policy expressions, and draw them as trees.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug messages")
    subparsers = parser.add_subparsers(dest="command", required=True)

    format_parser = subparsers.add_parser("format", help="Pretty-print an expression")
    format_parser.add_argument(
        "--policy", action="store_true", help="Use the Policy operators"
    )
    compact_parser = subparsers.add_parser("compact", help="Remove all whitespace")
    tree_parser = subparsers.add_parser("tree", help="Draw the tree of an expression")
    tree_parser.add_argument(
        "--key",
        action="append",
        type=parse_key,
        default=[],
        metavar="NAME=VALUE",
        help="Display VALUE as NAME (may be repeated)",
    )
    tree_parser.add_argument(
        "--annotate", action="store_true", help="Add notes to known fragments"
    )
    tree_parser.add_argument(
        "--expand-leaves",
        action="store_true",
        help="Draw the tree of each Taproot leaf script",
    )
    tree_parser.add_argument(
        "--abbreviate-keys", action="store_true", help="Shorten public keys"
    )
    tree_parser.add_argument(
        "--format",
        choices=["ascii", "json"],
        default="ascii",
        help="Output format (default: ascii)",
    )

    for sub in (format_parser, compact_parser, tree_parser):
        sub.add_argument(
            "expression",
            nargs="?",
            help="The expression (default: read from standard input)",
        )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    """Run a single command on an expression and print the result."""
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    expression = args.expression if args.expression is not None else sys.stdin.read()
    if args.command == "format":
        result = format_expression(expression, policy=args.policy)
    elif args.command == "compact":
        result = compact_expression(expression)
    else:
        options = RenderOptions(
            annotate=args.annotate,
            expand_leaves=args.expand_leaves,
            abbreviate_keys=args.abbreviate_keys,
        )
        result = render_tree(
            expression, dict(args.key), options, as_json=args.format == "json"
        )

    if result.is_error:
        print(f"Error: {result.error.message}", file=sys.stderr)
        sys.exit(1)
    if result.is_ok:
        print(result.value)


if __name__ == "__main__":
    main()

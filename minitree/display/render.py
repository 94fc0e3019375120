"""ASCII tree and JSON rendering for positioned trees."""

import json

from minitree.options import GRID_MARGIN

from .layout import PositionedNode

VERTICAL = "│"
HORIZONTAL = "─"
LEFT_CORNER = "┌"
RIGHT_CORNER = "┐"
TEE = "┬"
CROSS = "┼"
UP_LEFT_CORNER = "┘"


class Grid:
    """A fixed-size buffer of characters."""

    def __init__(self, rows, width):
        self.cells = [[" "] * width for _ in range(rows)]

    def put(self, row, col, char):
        self.cells[row][col] = char

    def write(self, row, col, text):
        self.cells[row][col : col + len(text)] = list(text)

    def lines(self):
        return ["".join(row).rstrip() for row in self.cells]


def draw_connectors(grid, node):
    """Draw the glyphs between {node} and its children, on the row below it."""
    if not node.children:
        return
    row = node.depth * 2 + 1

    if len(node.children) == 1:
        child = node.children[0]
        grid.put(row, (node.center + child.center) // 2, VERTICAL)
        return

    left = node.children[0].center
    right = node.children[-1].center
    for col in range(left + 1, right):
        grid.put(row, col, HORIZONTAL)
    grid.put(row, left, LEFT_CORNER)
    grid.put(row, right, RIGHT_CORNER)
    for child in node.children[1:-1]:
        grid.put(row, child.center, TEE)
    if node.center <= right:
        grid.put(row, node.center, CROSS)
        return

    # A long label may be centered past the last child: extend the span up to it.
    for col in range(right + 1, node.center):
        grid.put(row, col, HORIZONTAL)
    grid.put(row, right, TEE)
    grid.put(row, node.center, UP_LEFT_CORNER)


def render_ascii(root: PositionedNode, margin: int = GRID_MARGIN) -> str:
    """Render a positioned tree as a multi-line diagram.

    Even rows hold the labels, odd rows the connectors between a level and the next.
    """
    nodes = list(root.walk())
    rows = 2 * root.max_depth() + 1
    width = max(n.rightmost_extent for n in nodes) + margin
    grid = Grid(rows, width)

    for node in nodes:
        grid.write(node.depth * 2, node.position, node.text)
        draw_connectors(grid, node)

    return "\n".join(grid.lines())


def _node_to_dict(node: PositionedNode) -> dict:
    """Convert a PositionedNode to a JSON-serializable dictionary."""
    return {
        "text": node.text,
        "depth": node.depth,
        "position": node.position,
        "rightmost_extent": node.rightmost_extent,
        "children": [_node_to_dict(child) for child in node.children],
    }


def render_json(root: PositionedNode) -> str:
    """Render a positioned tree as a JSON string."""
    return json.dumps(_node_to_dict(root), indent=2)

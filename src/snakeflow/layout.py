"""
Serpentine layout engine for workflow canvases.

Nodes are placed in rows of at most ``row_capacity`` boxes. Even rows are
read left-to-right and odd rows right-to-left, so the sequence snakes down
the canvas and every connector stays short:

    [0] -> [1] -> [2] -> [3]
                          |
    [7] <- [6] <- [5] <- [4]
     |
    [8] -> [9]

The engine is made of pure functions. It never reads viewport state or
animation state; callers pass the row capacity and dimensions in and
receive fresh placements and connectors back.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .errors import IndexOutOfRangeError, InvalidArgumentError
from .models import (
    ConnectorKind,
    ConnectorPath,
    Direction,
    LayoutDimensions,
    NodePlacement,
    Point,
)

logger = logging.getLogger(__name__)

# Desktop node size and spacing, in pixels
NODE_WIDTH = 140
NODE_HEIGHT = 72
GAP_X = 40
GAP_Y = 40

# Height reserved for an empty canvas so the placeholder has room
EMPTY_CANVAS_HEIGHT = 200


def _check_whole_number(name: str, value: int, minimum: int) -> None:
    # bool is an int subclass but never a meaningful count
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgumentError(
            f"{name} must be an integer, got {type(value).__name__} {value!r}"
        )
    if value < minimum:
        raise InvalidArgumentError(f"{name} must be at least {minimum}, got {value}")


def _check_row_capacity(row_capacity: int) -> None:
    _check_whole_number("row_capacity", row_capacity, 1)


def compute_positions(
    node_count: int,
    row_capacity: int,
    node_width: float,
    node_height: float,
    gap_x: float,
    gap_y: float,
) -> List[NodePlacement]:
    """
    Compute the placement of every node in a serpentine layout.

    Args:
        node_count: Number of nodes to place.
        row_capacity: Maximum nodes per row before wrapping.
        node_width: Width of a node box.
        node_height: Height of a node box.
        gap_x: Horizontal gap between boxes.
        gap_y: Vertical gap between rows.

    Returns:
        One NodePlacement per node, in sequence order. Empty when
        ``node_count`` is 0.

    Raises:
        InvalidArgumentError: If ``row_capacity`` is below 1, ``node_count``
            is negative, a node dimension is not positive or a gap is
            negative.
    """
    _check_row_capacity(row_capacity)
    _check_whole_number("node_count", node_count, 0)
    dims = LayoutDimensions(node_width, node_height, gap_x, gap_y)

    positions: List[NodePlacement] = []
    for index in range(node_count):
        row = index // row_capacity
        column = index % row_capacity
        if row % 2 == 0:
            direction = Direction.LEFT_TO_RIGHT
            slot = column
        else:
            direction = Direction.RIGHT_TO_LEFT
            slot = row_capacity - 1 - column
        positions.append(
            NodePlacement(
                index=index,
                row=row,
                column_in_row=column,
                direction=direction,
                x=slot * dims.column_stride,
                y=row * dims.row_stride,
            )
        )
    return positions


def _connector(
    current: NodePlacement,
    following: NodePlacement,
    node_width: float,
    node_height: float,
) -> ConnectorPath:
    if current.row == following.row:
        # Trailing edge of the source, leading edge of the target
        if current.direction == Direction.LEFT_TO_RIGHT:
            from_x = current.x + node_width
            to_x = following.x
        else:
            from_x = current.x
            to_x = following.x + node_width
        mid_y = current.y + node_height / 2
        return ConnectorPath(
            from_index=current.index,
            to_index=following.index,
            kind=ConnectorKind.STRAIGHT,
            start=Point(from_x, mid_y),
            end=Point(to_x, mid_y),
        )

    # Row change: bottom-center of the source to top-center of the target.
    # Kept straight even when the rows are offset (shorter final row).
    return ConnectorPath(
        from_index=current.index,
        to_index=following.index,
        kind=ConnectorKind.ELBOW,
        start=Point(current.x + node_width / 2, current.y + node_height),
        end=Point(following.x + node_width / 2, following.y),
    )


def compute_connectors(
    positions: Sequence[NodePlacement],
    node_width: float,
    node_height: float,
) -> List[ConnectorPath]:
    """
    Compute the connector between every pair of consecutive nodes.

    Args:
        positions: Placements in sequence order, as returned by
            compute_positions.
        node_width: Width of a node box.
        node_height: Height of a node box.

    Returns:
        ``len(positions) - 1`` connectors (none for fewer than two nodes),
        ordered so that connector ``i`` joins node ``i`` to node ``i + 1``.
    """
    return [
        _connector(positions[i], positions[i + 1], node_width, node_height)
        for i in range(len(positions) - 1)
    ]


def connector_between(
    positions: Sequence[NodePlacement],
    index: int,
    node_width: float,
    node_height: float,
) -> ConnectorPath:
    """
    Compute the single connector from node ``index`` to node ``index + 1``.

    Raises:
        IndexOutOfRangeError: Unless ``0 <= index < len(positions) - 1``.
    """
    if index < 0 or index >= len(positions) - 1:
        raise IndexOutOfRangeError(
            f"connector index {index} out of range for {len(positions)} nodes"
        )
    return _connector(positions[index], positions[index + 1], node_width, node_height)


def row_count(positions: Sequence[NodePlacement]) -> int:
    """Number of rows occupied by the placements."""
    if not positions:
        return 0
    return positions[-1].row + 1


def canvas_size(
    positions: Sequence[NodePlacement],
    row_capacity: int,
    dimensions: LayoutDimensions,
) -> Tuple[float, float]:
    """
    Size of the drawing surface needed for the placements.

    The width always spans a full row so that right-to-left rows line up
    with the right edge. An empty canvas keeps a fixed placeholder height.
    """
    _check_row_capacity(row_capacity)
    width = row_capacity * dimensions.column_stride - dimensions.gap_x
    rows = row_count(positions)
    if rows == 0:
        return width, EMPTY_CANVAS_HEIGHT
    return width, rows * dimensions.row_stride - dimensions.gap_y


@dataclass
class LayoutResult:
    """Result of laying out one node list for one configuration."""

    row_capacity: int
    dimensions: LayoutDimensions
    placements: List[NodePlacement] = field(default_factory=list)
    connectors: List[ConnectorPath] = field(default_factory=list)
    rows: int = 0
    width: float = 0
    height: float = 0

    @property
    def node_count(self) -> int:
        return len(self.placements)


class SerpentineLayout:
    """
    Layout engine bound to a fixed set of dimensions.

    Example:
        >>> engine = SerpentineLayout()
        >>> result = engine.layout(6, row_capacity=4)
        >>> [p.row for p in result.placements]
        [0, 0, 0, 0, 1, 1]
    """

    def __init__(self, dimensions: Optional[LayoutDimensions] = None):
        """
        Initialize the layout engine.

        Args:
            dimensions: Node size and gaps. Defaults to the desktop size.
        """
        if dimensions is None:
            dimensions = LayoutDimensions(NODE_WIDTH, NODE_HEIGHT, GAP_X, GAP_Y)
        self.dimensions = dimensions

    def layout(self, node_count: int, row_capacity: int) -> LayoutResult:
        """
        Lay out ``node_count`` nodes in rows of ``row_capacity``.

        Args:
            node_count: Number of nodes.
            row_capacity: Maximum nodes per row.

        Returns:
            LayoutResult with placements, connectors and canvas size.
        """
        dims = self.dimensions
        placements = compute_positions(
            node_count,
            row_capacity,
            dims.node_width,
            dims.node_height,
            dims.gap_x,
            dims.gap_y,
        )
        connectors = compute_connectors(placements, dims.node_width, dims.node_height)
        width, height = canvas_size(placements, row_capacity, dims)
        logger.debug(
            "Laid out %d nodes in %d rows (capacity %d)",
            node_count,
            row_count(placements),
            row_capacity,
        )
        return LayoutResult(
            row_capacity=row_capacity,
            dimensions=dims,
            placements=placements,
            connectors=connectors,
            rows=row_count(placements),
            width=width,
            height=height,
        )

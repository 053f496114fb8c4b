"""
Data models for workflow canvas layout.

This module contains the dataclasses shared by the layout engine, the reveal
scheduler and the renderers. Placements and connectors are derived values:
they are recomputed from scratch whenever the node list or the layout
configuration changes and are never mutated in place.

Classes:
    Direction: Horizontal reading direction of a row.
    NodePlacement: Position of one node on the canvas.
    Point: A pixel coordinate.
    ConnectorKind: Straight (same row) or elbow (row change) connector.
    ConnectorPath: Line between two consecutive nodes.
    LayoutDimensions: Node size and gap configuration.
    NodeLayer: Category tag of a workflow node.
    NodeStatus: Change status of a node in a suggested workflow.
    WorkflowNode: Opaque node record consumed by the canvas.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .errors import InvalidArgumentError


class Direction(str, Enum):
    """Horizontal direction in which a row is read."""

    LEFT_TO_RIGHT = "ltr"
    RIGHT_TO_LEFT = "rtl"


@dataclass(frozen=True)
class NodePlacement:
    """
    Placement of a single node in the serpentine layout.

    Attributes:
        index: Position of the node in the ordered node sequence (0-based).
        row: Row the node falls in.
        column_in_row: Slot within the row in sequence order. For
            right-to-left rows this does not reverse; the x coordinate does.
        direction: Reading direction of the node's row.
        x: Left edge of the node in pixels.
        y: Top edge of the node in pixels.
    """

    index: int
    row: int
    column_in_row: int
    direction: Direction
    x: float
    y: float


@dataclass(frozen=True)
class Point:
    """A pixel coordinate on the canvas."""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


class ConnectorKind(str, Enum):
    """Shape of a connector between two consecutive nodes."""

    STRAIGHT = "straight"  # both nodes in the same row
    ELBOW = "elbow"  # wraps from one row to the next


@dataclass(frozen=True)
class ConnectorPath:
    """
    Connector between node ``from_index`` and node ``to_index``.

    Attributes:
        from_index: Index of the source node.
        to_index: Index of the target node, always ``from_index + 1``.
        kind: STRAIGHT for a same-row connector, ELBOW for a row change.
        start: Anchor on the source node.
        end: Anchor on the target node.
    """

    from_index: int
    to_index: int
    kind: ConnectorKind
    start: Point
    end: Point

    @property
    def points(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """Start and end as plain tuples, ready for a drawing API."""
        return (self.start.as_tuple(), self.end.as_tuple())


@dataclass(frozen=True)
class LayoutDimensions:
    """
    Pixel dimensions used by the layout engine.

    Attributes:
        node_width: Width of every node box.
        node_height: Height of every node box.
        gap_x: Horizontal space between boxes in a row.
        gap_y: Vertical space between rows.
    """

    node_width: float
    node_height: float
    gap_x: float
    gap_y: float

    def __post_init__(self):
        for name in ("node_width", "node_height", "gap_x", "gap_y"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidArgumentError(
                    f"{name} must be a number, got {type(value).__name__}"
                )
            if not math.isfinite(value):
                raise InvalidArgumentError(f"{name} must be finite, got {value}")
        if self.node_width <= 0 or self.node_height <= 0:
            raise InvalidArgumentError(
                f"node dimensions must be positive, got "
                f"{self.node_width}x{self.node_height}"
            )
        if self.gap_x < 0 or self.gap_y < 0:
            raise InvalidArgumentError(
                f"gaps must not be negative, got gap_x={self.gap_x}, "
                f"gap_y={self.gap_y}"
            )

    @property
    def column_stride(self) -> float:
        return self.node_width + self.gap_x

    @property
    def row_stride(self) -> float:
        return self.node_height + self.gap_y


class NodeLayer(str, Enum):
    """Category of a workflow node. Only renderers look at it."""

    INPUT = "input"
    PROCESSING = "processing"
    OUTPUT = "output"


class NodeStatus(str, Enum):
    """Change status of a node in an AI-suggested workflow."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class WorkflowNode:
    """
    A node record as produced by the user or by a generation service.

    The layout engine only cares about the node's position in the list; the
    remaining fields are carried through for renderers.

    Attributes:
        id: Unique identifier within one workflow (e.g. "user-node-3").
        name: Display name.
        layer: Category tag used for styling.
        node_id: Library definition this node was created from, if any.
        status: Change status when the node is part of a suggestion.
        custom_description: Optional free-text description.
    """

    id: str
    name: str
    layer: NodeLayer
    node_id: str = ""
    status: NodeStatus = NodeStatus.UNCHANGED
    custom_description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "node_id": self.node_id,
            "name": self.name,
            "layer": self.layer.value,
            "status": self.status.value,
        }
        if self.custom_description is not None:
            data["custom_description"] = self.custom_description
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkflowNode":
        """
        Build a node from a plain mapping.

        Raises:
            KeyError: If ``id``, ``name`` or ``layer`` is missing.
            ValueError: If ``layer`` or ``status`` is not a known value, or
                ``name`` or ``custom_description`` is not a string.
        """
        name = data["name"]
        if not isinstance(name, str):
            raise ValueError(f"name must be a string, got {type(name).__name__}")
        description = data.get("custom_description")
        if description is not None and not isinstance(description, str):
            raise ValueError(
                f"custom_description must be a string, got {type(description).__name__}"
            )
        return cls(
            id=str(data["id"]),
            name=name,
            layer=NodeLayer(data["layer"]),
            node_id=str(data.get("node_id") or ""),
            status=NodeStatus(data.get("status") or NodeStatus.UNCHANGED.value),
            custom_description=description,
        )

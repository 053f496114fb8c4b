"""
snakeflow - Serpentine workflow canvas layout

A Python library that lays out an ordered list of workflow nodes in rows
that alternate direction, routes the connectors between consecutive nodes
and schedules a staged reveal animation.

Example:
    >>> from snakeflow import compute_positions, compute_connectors
    >>> positions = compute_positions(6, 4, 140, 72, 40, 40)
    >>> [(p.row, p.x) for p in positions]
    [(0, 0), (0, 180), (0, 360), (0, 540), (1, 540), (1, 360)]
    >>> [c.kind.value for c in compute_connectors(positions, 140, 72)]
    ['straight', 'straight', 'straight', 'elbow', 'straight']

Canvas Example:
    >>> canvas = WorkflowCanvas(viewport_width=1280)
    >>> canvas.set_nodes(parse_nodes(payload))
    >>> while not canvas.reveal.is_terminal:
    ...     canvas.tick()
    >>> svg = render_to_svg(canvas.frame())
"""

from .canvas import CanvasFrame, ComparisonView, WorkflowCanvas
from .errors import IndexOutOfRangeError, InvalidArgumentError
from .layout import (
    LayoutResult,
    SerpentineLayout,
    canvas_size,
    compute_connectors,
    compute_positions,
    connector_between,
)
from .models import (
    ConnectorKind,
    ConnectorPath,
    Direction,
    LayoutDimensions,
    NodeLayer,
    NodePlacement,
    NodeStatus,
    Point,
    WorkflowNode,
)
from .parser import ParseError, Parser, parse_nodes
from .png_renderer import PNGRenderer, render_to_png
from .responsive import (
    COMPACT_DIMENSIONS,
    DEFAULT_DIMENSIONS,
    Breakpoints,
    Viewport,
    row_capacity_for_width,
)
from .reveal import AsyncRevealDriver, RevealScheduler, RevealState, advance
from .svg import SVGRenderer, connector_to_svg_path, render_to_svg
from .tracer import LayoutTrace

__version__ = "0.3.0"

__all__ = [
    # Layout
    "compute_positions",
    "compute_connectors",
    "connector_between",
    "canvas_size",
    "SerpentineLayout",
    "LayoutResult",
    # Models
    "Direction",
    "NodePlacement",
    "Point",
    "ConnectorKind",
    "ConnectorPath",
    "LayoutDimensions",
    "NodeLayer",
    "NodeStatus",
    "WorkflowNode",
    # Errors
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "ParseError",
    # Responsive
    "Viewport",
    "Breakpoints",
    "DEFAULT_DIMENSIONS",
    "COMPACT_DIMENSIONS",
    "row_capacity_for_width",
    # Reveal
    "RevealState",
    "RevealScheduler",
    "AsyncRevealDriver",
    "advance",
    # Canvas
    "WorkflowCanvas",
    "CanvasFrame",
    "ComparisonView",
    # Parsing
    "Parser",
    "parse_nodes",
    # Rendering
    "SVGRenderer",
    "render_to_svg",
    "connector_to_svg_path",
    "PNGRenderer",
    "render_to_png",
    # Debug/Tracing
    "LayoutTrace",
]

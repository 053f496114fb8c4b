"""
SVG output for workflow canvases.

Connectors become ``<path>`` elements ending in an arrowhead marker; nodes
become rounded rectangles with a coloured band across the top. Hidden
nodes and connectors (per the reveal counters) are emitted with zero
opacity so the document structure does not change while animating.
"""

from typing import List
from xml.sax.saxutils import escape

from .canvas import CanvasFrame
from .library import LAYER_COLORS
from .models import ConnectorPath, NodeStatus

BAND_HEIGHT = 6
LINE_COLOR = "#A0AEC0"
BORDER_COLOR = "#E2E8F0"
ADDED_COLOR = "#48BB78"
REMOVED_COLOR = "#FC8181"
TEXT_COLOR = "#1A202C"

ATTR_ENTITIES = {'"': "&quot;"}


def _num(value: float) -> str:
    """Format a coordinate without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def connector_to_svg_path(connector: ConnectorPath) -> str:
    """
    SVG path data for a connector, e.g. ``"M 140 36 L 180 36"``.
    """
    start, end = connector.start, connector.end
    return f"M {_num(start.x)} {_num(start.y)} L {_num(end.x)} {_num(end.y)}"


class SVGRenderer:
    """Renders a CanvasFrame as a standalone SVG document."""

    def __init__(self, margin: int = 10, font_size: int = 11, corner_radius: int = 8):
        self.margin = margin
        self.font_size = font_size
        self.corner_radius = corner_radius

    def render(self, frame: CanvasFrame) -> str:
        layout = frame.layout
        dims = layout.dimensions
        m = self.margin
        width = layout.width + 2 * m
        height = layout.height + 2 * m

        parts: List[str] = [
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{_num(width)}" height="{_num(height)}" '
            f'viewBox="0 0 {_num(width)} {_num(height)}">',
            "<defs>",
            '<marker id="wf-arrowhead" markerWidth="6" markerHeight="6" '
            'refX="5" refY="3" orient="auto">',
            f'<polygon points="0 0, 6 3, 0 6" fill="{LINE_COLOR}"/>',
            "</marker>",
            "</defs>",
            f'<g transform="translate({m} {m})">',
        ]

        for i, connector in enumerate(layout.connectors):
            opacity = 1 if frame.is_connector_visible(i) else 0
            parts.append(
                f'<path d="{connector_to_svg_path(connector)}" stroke="{LINE_COLOR}" '
                f'stroke-width="2" fill="none" marker-end="url(#wf-arrowhead)" '
                f'opacity="{opacity}"/>'
            )

        for i, (placement, node) in enumerate(zip(layout.placements, frame.nodes)):
            colors = LAYER_COLORS[node.layer]
            visible = frame.is_node_visible(i)
            opacity = 0 if not visible else (0.4 if node.status == NodeStatus.REMOVED else 1)

            if node.status == NodeStatus.ADDED:
                border = f'stroke="{ADDED_COLOR}" stroke-width="2" stroke-dasharray="6 4"'
            elif node.status == NodeStatus.REMOVED:
                border = f'stroke="{REMOVED_COLOR}" stroke-width="2" stroke-dasharray="6 4"'
            else:
                border = f'stroke="{BORDER_COLOR}" stroke-width="1"'

            x, y = _num(placement.x), _num(placement.y)
            w, h = _num(dims.node_width), _num(dims.node_height)
            decoration = (
                ' text-decoration="line-through"'
                if node.status == NodeStatus.REMOVED
                else ""
            )
            parts.extend(
                [
                    f'<g id="{escape(node.id, ATTR_ENTITIES)}" opacity="{opacity}">',
                    f'<rect x="{x}" y="{y}" width="{w}" height="{h}" '
                    f'rx="{self.corner_radius}" fill="#FFFFFF" {border}/>',
                    f'<rect x="{x}" y="{y}" width="{w}" height="{BAND_HEIGHT}" '
                    f'fill="{colors.band}"/>',
                    f'<text x="{_num(placement.x + dims.node_width / 2)}" '
                    f'y="{_num(placement.y + (dims.node_height + BAND_HEIGHT) / 2)}" '
                    f'font-size="{self.font_size}" font-weight="600" '
                    f'text-anchor="middle" dominant-baseline="middle" '
                    f'fill="{TEXT_COLOR}"{decoration}>{escape(node.name)}</text>',
                    "</g>",
                ]
            )

        parts.extend(["</g>", "</svg>"])
        return "\n".join(parts)


def render_to_svg(frame: CanvasFrame, **kwargs) -> str:
    """
    Convenience function to render a frame to an SVG string.

    Args:
        frame: Frame to render.
        **kwargs: Additional parameters for SVGRenderer.
    """
    return SVGRenderer(**kwargs).render(frame)

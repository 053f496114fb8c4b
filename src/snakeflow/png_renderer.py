"""
PNG Renderer module for workflow canvases.

Renders a CanvasFrame as a high-resolution PNG image: connectors with
filled arrowheads, node boxes with a layer-coloured band and centred
names. Nodes and connectors the reveal has not reached yet are skipped,
so rendering successive frames produces the entrance animation.
"""

import math
import os
from typing import List, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from .canvas import CanvasFrame
from .library import LAYER_COLORS
from .models import NodeStatus

RGB = Tuple[int, int, int]


class PNGRenderer:
    """Renders workflow canvases as PNG images."""

    def __init__(
        self,
        font_size: int = 11,
        font_path: str | None = None,  # Custom font path
        scale: int = 2,  # For high-resolution output
        margin: int = 20,
        band_height: int = 6,
        line_width: int = 2,
        arrow_size: int = 6,
        show_hidden: bool = False,  # Draw nodes the reveal has not reached
    ):
        self.font_size = font_size
        self.font_path = font_path
        self.scale = scale
        self.margin = margin
        self.band_height = band_height
        self.line_width = line_width
        self.arrow_size = arrow_size
        self.show_hidden = show_hidden

        # Colors
        self.bg_color: RGB = (255, 255, 255)
        self.box_fill: RGB = (255, 255, 255)
        self.box_outline: RGB = ImageColor.getrgb("#E2E8F0")
        self.added_outline: RGB = ImageColor.getrgb("#48BB78")
        self.removed_outline: RGB = ImageColor.getrgb("#FC8181")
        self.text_color: RGB = ImageColor.getrgb("#1A202C")
        self.line_color: RGB = ImageColor.getrgb("#A0AEC0")

        self.font = None

    def _get_font(self) -> ImageFont.FreeTypeFont:
        """Get a font for rendering node names."""
        if self.font is not None:
            return self.font

        font_size = self.font_size * self.scale

        if self.font_path:
            if not os.path.exists(self.font_path):
                raise FileNotFoundError(f"Font not found: {self.font_path}")
            self.font = ImageFont.truetype(self.font_path, font_size)
            return self.font

        font_options = [
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
            "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
            "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
            "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
            "/System/Library/Fonts/Helvetica.ttc",
            "C:/Windows/Fonts/arialbd.ttf",
        ]

        for path in font_options:
            if os.path.exists(path):
                try:
                    self.font = ImageFont.truetype(path, font_size)
                    return self.font
                except OSError:
                    continue

        # Fallback to default font
        try:
            self.font = ImageFont.load_default(size=font_size)
        except TypeError:
            # Older Pillow versions don't support size parameter
            self.font = ImageFont.load_default()
        return self.font

    def _px(self, value: float) -> int:
        """Convert a layout coordinate to an image pixel."""
        return int(round((value + self.margin) * self.scale))

    def render(self, frame: CanvasFrame, output_path: str = "workflow.png") -> str:
        """
        Render the frame as a PNG image.

        Args:
            frame: Frame to render.
            output_path: Path to save the PNG file.

        Returns:
            Path to the saved PNG file.
        """
        img = self.render_image(frame)
        img.save(output_path, "PNG", dpi=(300, 300))
        return output_path

    def render_image(self, frame: CanvasFrame) -> Image.Image:
        """Render the frame to an in-memory image."""
        layout = frame.layout
        canvas_width = self._px(layout.width + self.margin)
        canvas_height = self._px(layout.height + self.margin)

        img = Image.new("RGB", (canvas_width, canvas_height), self.bg_color)
        draw = ImageDraw.Draw(img)

        # Connectors first so boxes sit on top of their ends
        for i, connector in enumerate(layout.connectors):
            if not (self.show_hidden or frame.is_connector_visible(i)):
                continue
            start = (self._px(connector.start.x), self._px(connector.start.y))
            end = (self._px(connector.end.x), self._px(connector.end.y))
            draw.line([start, end], fill=self.line_color, width=self.line_width * self.scale)
            self._draw_arrowhead(draw, start, end)

        for i, (placement, node) in enumerate(zip(layout.placements, frame.nodes)):
            if not (self.show_hidden or frame.is_node_visible(i)):
                continue
            self._draw_box(
                draw,
                self._px(placement.x),
                self._px(placement.y),
                int(layout.dimensions.node_width * self.scale),
                int(layout.dimensions.node_height * self.scale),
                node,
            )

        return img

    def _draw_box(self, draw: ImageDraw.ImageDraw, x: int, y: int, w: int, h: int, node):
        """Draw a node box with its layer band and name."""
        line_width = max(1, self.scale)
        outline = self.box_outline
        if node.status == NodeStatus.ADDED:
            outline = self.added_outline
        elif node.status == NodeStatus.REMOVED:
            outline = self.removed_outline

        draw.rounded_rectangle(
            [x, y, x + w, y + h],
            radius=4 * self.scale,
            fill=self.box_fill,
            outline=outline,
            width=line_width * (2 if node.status != NodeStatus.UNCHANGED else 1),
        )

        band = ImageColor.getrgb(LAYER_COLORS[node.layer].band)
        band_h = self.band_height * self.scale
        draw.rectangle([x + line_width, y + line_width, x + w - line_width, y + band_h], fill=band)

        font = self._get_font()
        lines = self._wrap(draw, node.name, w - 16 * self.scale)
        line_spacing = 2 * self.scale

        line_dims = []
        total_height = 0
        for i, line in enumerate(lines):
            bbox = draw.textbbox((0, 0), line, font=font)
            line_dims.append((bbox[2] - bbox[0], bbox[3] - bbox[1]))
            total_height += bbox[3] - bbox[1]
            if i > 0:
                total_height += line_spacing

        current_y = y + band_h + (h - band_h - total_height) // 2
        for line, (line_w, line_h) in zip(lines, line_dims):
            text_x = x + (w - line_w) // 2
            draw.text((text_x, current_y), line, fill=self.text_color, font=font)
            if node.status == NodeStatus.REMOVED:
                strike_y = current_y + line_h // 2
                draw.line([(text_x, strike_y), (text_x + line_w, strike_y)], fill=self.text_color)
            current_y += line_h + line_spacing

    def _wrap(self, draw: ImageDraw.ImageDraw, text: str, max_width: int) -> List[str]:
        """Greedy word wrap to at most two lines, ellipsizing the rest."""
        font = self._get_font()
        words = text.split()
        lines: List[str] = []
        current = ""
        for word in words:
            candidate = f"{current} {word}".strip()
            bbox = draw.textbbox((0, 0), candidate, font=font)
            if bbox[2] - bbox[0] <= max_width or not current:
                current = candidate
            else:
                lines.append(current)
                current = word
        if current:
            lines.append(current)
        if len(lines) > 2:
            lines = [lines[0], self._ellipsize(draw, lines[1], max_width)]
        # A single word wider than the box still has to fit
        return [
            line if self._text_width(draw, line) <= max_width
            else self._ellipsize(draw, line, max_width)
            for line in lines
        ] or [""]

    def _text_width(self, draw: ImageDraw.ImageDraw, text: str) -> int:
        bbox = draw.textbbox((0, 0), text, font=self._get_font())
        return bbox[2] - bbox[0]

    def _ellipsize(self, draw: ImageDraw.ImageDraw, text: str, max_width: int) -> str:
        """Trim words, then characters, until ``text + "..."`` fits."""
        while text and self._text_width(draw, text + "...") > max_width:
            if " " in text:
                text = text.rsplit(" ", 1)[0]
            else:
                text = text[:-1]
        return text + "..."

    def _draw_arrowhead(
        self,
        draw: ImageDraw.ImageDraw,
        from_point: Tuple[int, int],
        to_point: Tuple[int, int],
    ):
        """Draw an arrowhead at the end of a line."""
        x1, y1 = from_point
        x2, y2 = to_point

        arrow_size = self.arrow_size * self.scale

        angle = math.atan2(y2 - y1, x2 - x1)
        angle1 = angle + math.pi * 0.8
        angle2 = angle - math.pi * 0.8

        ax1 = x2 + arrow_size * math.cos(angle1)
        ay1 = y2 + arrow_size * math.sin(angle1)
        ax2 = x2 + arrow_size * math.cos(angle2)
        ay2 = y2 + arrow_size * math.sin(angle2)

        draw.polygon([(x2, y2), (ax1, ay1), (ax2, ay2)], fill=self.line_color)


def render_to_png(frame: CanvasFrame, output_path: str = "workflow.png", **kwargs) -> str:
    """
    Convenience function to render a canvas frame to PNG.

    Args:
        frame: Frame to render.
        output_path: Path to save the PNG file.
        **kwargs: Additional parameters for PNGRenderer.

    Returns:
        Path to the saved PNG file.
    """
    renderer = PNGRenderer(**kwargs)
    return renderer.render(frame, output_path)

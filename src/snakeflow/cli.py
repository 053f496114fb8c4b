"""
Command-line entry point.

Lays out a node payload (as returned by a generation service) for a given
viewport width and writes it as SVG, PNG or a JSON description of the
layout. ``--ticks`` renders the frame after that many reveal steps instead
of the fully revealed canvas.

    snakeflow workflow.json --width 800 --out workflow.svg
    cat workflow.json | snakeflow - --format json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .canvas import CanvasFrame, WorkflowCanvas
from .errors import InvalidArgumentError
from .parser import ParseError, Parser
from .png_renderer import PNGRenderer
from .svg import SVGRenderer, connector_to_svg_path

logger = logging.getLogger(__name__)

FORMATS = ("svg", "png", "json")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="snakeflow",
        description="Lay out a workflow node list on a serpentine canvas",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")

    p.add_argument("input", help="Path to a JSON node payload, or '-' for stdin")
    p.add_argument("--width", type=float, default=1200, help="Viewport width in pixels")
    p.add_argument("--format", choices=FORMATS, default=None, help="Output format (default: from --out suffix, else svg)")
    p.add_argument("--out", type=str, default="", help="Output file path (default: stdout for svg/json)")
    p.add_argument("--ticks", type=int, default=None, help="Reveal steps to apply (default: fully revealed)")
    p.add_argument("--scale", type=int, default=2, help="PNG resolution multiplier")
    return p.parse_args(argv)


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def resolve_format(args: argparse.Namespace) -> str:
    if args.format:
        return args.format
    suffix = Path(args.out).suffix.lower().lstrip(".") if args.out else ""
    return suffix if suffix in FORMATS else "svg"


def frame_to_dict(frame: CanvasFrame) -> Dict[str, Any]:
    """JSON-serialisable description of a frame."""
    layout = frame.layout
    reveal = frame.reveal
    return {
        "row_capacity": layout.row_capacity,
        "compact": frame.compact,
        "width": layout.width,
        "height": layout.height,
        "rows": layout.rows,
        "placements": [
            {
                "index": p.index,
                "id": node.id,
                "row": p.row,
                "column_in_row": p.column_in_row,
                "direction": p.direction.value,
                "x": p.x,
                "y": p.y,
            }
            for p, node in zip(layout.placements, frame.nodes)
        ],
        "connectors": [
            {
                "from": c.from_index,
                "to": c.to_index,
                "kind": c.kind.value,
                "path": connector_to_svg_path(c),
            }
            for c in layout.connectors
        ],
        "reveal": {
            "nodes_revealed": reveal.nodes_revealed if reveal else len(frame.nodes),
            "connectors_revealed": (
                reveal.connectors_revealed if reveal else len(layout.connectors)
            ),
        },
    }


def read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def write_output(frame: CanvasFrame, fmt: str, args: argparse.Namespace) -> None:
    if fmt == "png":
        PNGRenderer(scale=args.scale).render(frame, args.out)
        logger.info("Wrote %s", args.out)
        return

    if fmt == "json":
        text = json.dumps(frame_to_dict(frame), indent=2)
    else:
        text = SVGRenderer().render(frame)

    if args.out:
        Path(args.out).write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %s", args.out)
    else:
        print(text)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    fmt = resolve_format(args)
    if fmt == "png" and not args.out:
        print("snakeflow: error: --out is required for png output", file=sys.stderr)
        return 1

    try:
        nodes = Parser().parse(read_input(args.input))
        canvas = WorkflowCanvas(viewport_width=args.width)
        canvas.set_nodes(nodes)
        if args.ticks is None:
            while not canvas.reveal.is_terminal:
                canvas.tick()
        else:
            if args.ticks < 0:
                raise InvalidArgumentError(f"--ticks must not be negative, got {args.ticks}")
            for _ in range(args.ticks):
                canvas.tick()

        frame = canvas.frame()
        logger.info(
            "Laid out %d nodes in %d rows at width %s",
            len(frame.nodes),
            frame.layout.rows,
            args.width,
        )
        write_output(frame, fmt, args)
    except (OSError, ParseError, InvalidArgumentError) as exc:
        print(f"snakeflow: error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

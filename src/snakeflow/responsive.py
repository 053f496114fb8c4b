"""
Viewport-driven layout configuration.

Row capacity and node size are step functions of the viewport width. They
are inputs to the layout engine, not part of its state: a resize produces a
new Viewport, and the caller lays the nodes out again with it.
"""

from dataclasses import dataclass

from .errors import InvalidArgumentError
from .layout import GAP_X, GAP_Y, NODE_HEIGHT, NODE_WIDTH
from .models import LayoutDimensions

DEFAULT_DIMENSIONS = LayoutDimensions(NODE_WIDTH, NODE_HEIGHT, GAP_X, GAP_Y)
COMPACT_DIMENSIONS = LayoutDimensions(120, 64, 24, 24)


@dataclass(frozen=True)
class Breakpoints:
    """
    Width thresholds, in pixels, for the responsive step functions.

    Attributes:
        wide: Minimum width for ``wide_capacity`` nodes per row.
        medium: Minimum width for ``medium_capacity`` nodes per row. Below
            this width compact node dimensions are used.
    """

    wide: int = 1200
    medium: int = 768
    wide_capacity: int = 4
    medium_capacity: int = 3
    narrow_capacity: int = 2

    def __post_init__(self):
        if self.medium > self.wide:
            raise InvalidArgumentError(
                f"medium breakpoint ({self.medium}) exceeds wide ({self.wide})"
            )
        if min(self.wide_capacity, self.medium_capacity, self.narrow_capacity) < 1:
            raise InvalidArgumentError("row capacities must be at least 1")


DEFAULT_BREAKPOINTS = Breakpoints()


def _check_width(width: float) -> None:
    if width < 0:
        raise InvalidArgumentError(f"viewport width must not be negative, got {width}")


def row_capacity_for_width(
    width: float, breakpoints: Breakpoints = DEFAULT_BREAKPOINTS
) -> int:
    """Nodes per row for a viewport ``width`` pixels wide."""
    _check_width(width)
    if width >= breakpoints.wide:
        return breakpoints.wide_capacity
    if width >= breakpoints.medium:
        return breakpoints.medium_capacity
    return breakpoints.narrow_capacity


def is_compact(width: float, breakpoints: Breakpoints = DEFAULT_BREAKPOINTS) -> bool:
    """Whether compact (mobile) node dimensions apply at ``width``."""
    _check_width(width)
    return width < breakpoints.medium


def dimensions_for_width(
    width: float, breakpoints: Breakpoints = DEFAULT_BREAKPOINTS
) -> LayoutDimensions:
    if is_compact(width, breakpoints):
        return COMPACT_DIMENSIONS
    return DEFAULT_DIMENSIONS


@dataclass(frozen=True)
class Viewport:
    """
    A viewport width and the layout configuration it implies.

    Example:
        >>> Viewport(1024).row_capacity
        3
    """

    width: float
    breakpoints: Breakpoints = DEFAULT_BREAKPOINTS

    def __post_init__(self):
        _check_width(self.width)

    @property
    def row_capacity(self) -> int:
        return row_capacity_for_width(self.width, self.breakpoints)

    @property
    def compact(self) -> bool:
        return is_compact(self.width, self.breakpoints)

    @property
    def dimensions(self) -> LayoutDimensions:
        return dimensions_for_width(self.width, self.breakpoints)

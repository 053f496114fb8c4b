"""
Workflow canvas state.

WorkflowCanvas is the owner of everything the layout engine deliberately
does not hold: the node list, the viewport, the undo history, the
comparison view and the reveal scheduler. Every change recomputes the
layout from scratch and decides what happens to the reveal:

- replacing the list (generated workflow, comparison toggle, clear)
  restarts the reveal from zero
- appending a node reveals everything but the new node, which animates in
- removing a node or undoing shows the whole list at once
- resizing the viewport only re-lays out; the reveal is left alone
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .errors import InvalidArgumentError
from .layout import LayoutResult, SerpentineLayout
from .library import get_definition
from .models import NodeLayer, WorkflowNode
from .responsive import DEFAULT_BREAKPOINTS, Breakpoints, Viewport
from .reveal import RevealScheduler, RevealState
from .tracer import LayoutTrace

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT_WIDTH = 1200
USER_NODE_PREFIX = "user-node-"


class ComparisonView(str, Enum):
    """Which workflow is shown once an AI suggestion exists."""

    USER = "user"
    AI = "ai"


@dataclass
class CanvasFrame:
    """
    Everything a renderer needs to draw the canvas at one instant.

    Attributes:
        layout: Placements, connectors and canvas size.
        nodes: Displayed nodes, aligned with ``layout.placements``.
        reveal: Reveal counters at this instant.
        compact: Whether compact node dimensions are in effect.
    """

    layout: LayoutResult
    nodes: List[WorkflowNode] = field(default_factory=list)
    reveal: Optional[RevealState] = None
    compact: bool = False

    def is_node_visible(self, index: int) -> bool:
        if self.reveal is None:
            return 0 <= index < len(self.nodes)
        return 0 <= index < self.reveal.nodes_revealed

    def is_connector_visible(self, index: int) -> bool:
        if self.reveal is None:
            return 0 <= index < len(self.layout.connectors)
        return 0 <= index < self.reveal.connectors_revealed


class WorkflowCanvas:
    """
    Interactive workflow canvas.

    Example:
        >>> canvas = WorkflowCanvas(viewport_width=1280)
        >>> _ = canvas.add_from_library("input-form")
        >>> _ = canvas.add_from_library("proc-sentiment")
        >>> [p.x for p in canvas.layout.placements]
        [0, 180]
    """

    def __init__(
        self,
        viewport_width: float = DEFAULT_VIEWPORT_WIDTH,
        breakpoints: Breakpoints = DEFAULT_BREAKPOINTS,
        debug: bool = False,
    ):
        """
        Initialize an empty canvas.

        Args:
            viewport_width: Width of the viewport in pixels.
            breakpoints: Width thresholds for row capacity and compact mode.
            debug: Record layout stages and reveal events in a LayoutTrace.
        """
        self.viewport = Viewport(viewport_width, breakpoints)
        self.scheduler = RevealScheduler()
        self.order_warning = False
        self.order_warning_dismissed = False

        self._user_nodes: List[WorkflowNode] = []
        self._suggestion: Optional[List[WorkflowNode]] = None
        self._view = ComparisonView.USER
        self._undo_stack: List[List[WorkflowNode]] = []
        self._trace: Optional[LayoutTrace] = LayoutTrace() if debug else None

        self._layout = self._compute_layout()

    # --- read access ---------------------------------------------------------

    @property
    def nodes(self) -> List[WorkflowNode]:
        """Nodes currently displayed, in sequence order."""
        if self._view == ComparisonView.AI and self._suggestion is not None:
            return list(self._suggestion)
        return list(self._user_nodes)

    @property
    def user_nodes(self) -> List[WorkflowNode]:
        return list(self._user_nodes)

    @property
    def suggestion(self) -> Optional[List[WorkflowNode]]:
        return list(self._suggestion) if self._suggestion is not None else None

    @property
    def comparison_view(self) -> ComparisonView:
        return self._view

    @property
    def layout(self) -> LayoutResult:
        return self._layout

    @property
    def reveal(self) -> RevealState:
        return self.scheduler.state

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def frame(self) -> CanvasFrame:
        return CanvasFrame(
            layout=self._layout,
            nodes=self.nodes,
            reveal=self.scheduler.state,
            compact=self.viewport.compact,
        )

    def get_trace(self) -> Optional[LayoutTrace]:
        """Trace of this canvas, or None when debug mode is off."""
        return self._trace

    # --- replacing the list --------------------------------------------------

    def set_nodes(self, nodes: Sequence[WorkflowNode]) -> int:
        """
        Replace the workflow, e.g. with a generated one.

        Undo history and any suggestion are dropped and the reveal restarts.

        Returns:
            The reveal generation token for the new list.
        """
        self._user_nodes = list(nodes)
        self._undo_stack = []
        self._suggestion = None
        self._view = ComparisonView.USER
        self.order_warning = False
        return self._replace_displayed()

    def set_suggestion(self, nodes: Sequence[WorkflowNode]) -> int:
        """Store an AI-suggested workflow and switch to showing it."""
        self._suggestion = list(nodes)
        self._view = ComparisonView.AI
        return self._replace_displayed()

    def set_comparison_view(self, view: ComparisonView) -> int:
        """
        Toggle between the user's workflow and the suggestion.

        Raises:
            InvalidArgumentError: If ``view`` is AI and there is no suggestion.
        """
        view = ComparisonView(view)
        if view == ComparisonView.AI and self._suggestion is None:
            raise InvalidArgumentError("No suggested workflow to compare against")
        self._view = view
        return self._replace_displayed()

    def clear(self) -> int:
        """Remove every node, the undo history and any suggestion."""
        self._undo_stack = []
        self._user_nodes = []
        self._suggestion = None
        self._view = ComparisonView.USER
        self.order_warning = False
        return self._replace_displayed()

    # --- editing -------------------------------------------------------------

    def add_node(self, node: WorkflowNode) -> int:
        """
        Append a node to the user's workflow.

        Existing nodes stay visible; only the new node and its incoming
        connector animate in. An output node added before the workflow has
        both an input and a processing node raises the order warning.

        Returns:
            The reveal generation token.
        """
        self._start_edit()
        self._undo_stack.append(list(self._user_nodes))
        self._user_nodes.append(node)
        self._check_order(node)
        count = len(self._user_nodes)
        return self._seek(count - 1, count)

    def add_from_library(self, node_id: str) -> WorkflowNode:
        """
        Append a node created from a library definition.

        Raises:
            KeyError: If ``node_id`` is not in the library.
        """
        definition = get_definition(node_id)
        node = WorkflowNode(
            id=self._next_user_id(),
            name=definition.name,
            layer=definition.layer,
            node_id=definition.node_id,
        )
        self.add_node(node)
        return node

    def remove_node(self, node_id: str) -> int:
        """
        Remove the node with id ``node_id`` from the user's workflow.

        Raises:
            KeyError: If no node has that id.
        """
        remaining = [n for n in self._user_nodes if n.id != node_id]
        if len(remaining) == len(self._user_nodes):
            raise KeyError(f"No node with id {node_id!r}")
        self._start_edit()
        self._undo_stack.append(list(self._user_nodes))
        self._user_nodes = remaining
        count = len(remaining)
        return self._seek(count, count)

    def undo(self) -> bool:
        """
        Restore the workflow as it was before the last edit.

        Returns:
            False if there was nothing to undo.
        """
        if not self._undo_stack:
            return False
        self._start_edit()
        self._user_nodes = self._undo_stack.pop()
        count = len(self._user_nodes)
        self._seek(count, count)
        return True

    def dismiss_order_warning(self) -> None:
        self.order_warning = False
        self.order_warning_dismissed = True

    # --- viewport and clock --------------------------------------------------

    def set_viewport_width(self, width: float) -> LayoutResult:
        """Re-lay out for a new viewport width. The reveal is unaffected."""
        self.viewport = Viewport(width, self.viewport.breakpoints)
        self._layout = self._compute_layout()
        return self._layout

    def tick(self, generation: Optional[int] = None) -> bool:
        """Advance the reveal by one step. See RevealScheduler.tick."""
        applied = self.scheduler.tick(generation)
        self._record_reveal("tick" if applied else "stale_tick")
        return applied

    # --- internals -----------------------------------------------------------

    def _start_edit(self) -> None:
        # A suggestion describes the workflow it was made for
        if self._suggestion is not None:
            self._suggestion = None
            self._view = ComparisonView.USER

    def _next_user_id(self) -> str:
        used = {n.id for n in self._user_nodes}
        number = len(self._user_nodes) + 1
        while f"{USER_NODE_PREFIX}{number}" in used:
            number += 1
        return f"{USER_NODE_PREFIX}{number}"

    def _check_order(self, node: WorkflowNode) -> None:
        if self.order_warning_dismissed or node.layer != NodeLayer.OUTPUT:
            return
        layers = {n.layer for n in self._user_nodes}
        if NodeLayer.INPUT not in layers or NodeLayer.PROCESSING not in layers:
            logger.info("Output node %r added before input and processing", node.name)
            self.order_warning = True

    def _replace_displayed(self) -> int:
        self._layout = self._compute_layout()
        generation = self.scheduler.reset(len(self.nodes))
        self._record_reveal("reset")
        return generation

    def _seek(self, nodes_revealed: int, node_count: int) -> int:
        self._layout = self._compute_layout()
        generation = self.scheduler.seek(nodes_revealed, node_count)
        self._record_reveal("seek")
        return generation

    def _compute_layout(self) -> LayoutResult:
        viewport = self.viewport
        engine = SerpentineLayout(viewport.dimensions)
        result = engine.layout(len(self.nodes), viewport.row_capacity)
        if self._trace is not None:
            self._trace.add_stage(
                "viewport",
                {
                    "width": viewport.width,
                    "row_capacity": viewport.row_capacity,
                    "compact": viewport.compact,
                },
            )
            self._trace.add_stage(
                "positions",
                {
                    "node_count": result.node_count,
                    "rows": result.rows,
                    "positions": [(p.x, p.y) for p in result.placements],
                },
            )
            self._trace.add_stage(
                "connectors",
                {
                    "count": len(result.connectors),
                    "kinds": [c.kind.value for c in result.connectors],
                },
            )
        return result

    def _record_reveal(self, kind: str) -> None:
        if self._trace is None:
            return
        state = self.scheduler.state
        self._trace.add_reveal_event(
            kind, state.generation, state.nodes_revealed, state.connectors_revealed
        )

"""Unit tests for the canvas module."""

import pytest

from snakeflow.canvas import CanvasFrame, ComparisonView, WorkflowCanvas
from snakeflow.errors import InvalidArgumentError
from snakeflow.models import Direction, NodeLayer, WorkflowNode
from snakeflow.responsive import COMPACT_DIMENSIONS, DEFAULT_DIMENSIONS


def reveal_all(canvas):
    while not canvas.reveal.is_terminal:
        canvas.tick()


class TestInitialState:
    """Tests for a freshly created canvas."""

    def test_empty(self, canvas):
        assert canvas.nodes == []
        assert canvas.layout.placements == []
        assert canvas.layout.connectors == []
        assert canvas.reveal.node_count == 0
        assert canvas.can_undo is False
        assert canvas.comparison_view == ComparisonView.USER

    def test_viewport_drives_layout(self):
        assert WorkflowCanvas(viewport_width=1280).layout.row_capacity == 4
        assert WorkflowCanvas(viewport_width=900).layout.row_capacity == 3
        assert WorkflowCanvas(viewport_width=500).layout.row_capacity == 2


class TestSetNodes:
    """Tests for replacing the node list."""

    def test_layout_follows_nodes(self, canvas, survey_nodes):
        canvas.set_nodes(survey_nodes)
        assert canvas.layout.node_count == 6
        assert canvas.layout.rows == 2
        assert len(canvas.layout.connectors) == 5

    def test_reveal_restarts(self, canvas, survey_nodes):
        canvas.set_nodes(survey_nodes[:3])
        reveal_all(canvas)
        canvas.set_nodes(survey_nodes)
        assert canvas.reveal.node_count == 6
        assert canvas.reveal.nodes_revealed == 0
        assert canvas.reveal.connectors_revealed == 0

    def test_old_generation_ticks_are_stale(self, canvas, survey_nodes):
        old = canvas.set_nodes(survey_nodes)
        canvas.set_nodes(survey_nodes[:2])
        assert canvas.tick(old) is False
        assert canvas.reveal.nodes_revealed == 0

    def test_undo_history_dropped(self, canvas, survey_nodes):
        canvas.add_from_library("input-form")
        canvas.set_nodes(survey_nodes)
        assert canvas.can_undo is False


class TestEditing:
    """Tests for add, remove and undo."""

    def test_add_from_library(self, canvas):
        node = canvas.add_from_library("input-form")
        assert node.id == "user-node-1"
        assert node.name == "Form / Survey"
        assert node.layer == NodeLayer.INPUT
        assert canvas.nodes == [node]

    def test_unknown_library_node(self, canvas):
        with pytest.raises(KeyError):
            canvas.add_from_library("input-carrier-pigeon")

    def test_add_reveals_only_new_node(self, canvas):
        for node_id in ("input-form", "proc-sentiment", "proc-summarizer"):
            canvas.add_from_library(node_id)
        assert canvas.reveal.nodes_revealed == 2
        assert canvas.reveal.connectors_revealed == 1
        canvas.tick()
        canvas.tick()
        assert canvas.reveal.is_terminal

    def test_add_keeps_existing_positions(self, canvas):
        canvas.add_from_library("input-form")
        before = canvas.layout.placements[0]
        canvas.add_from_library("proc-ai-agent")
        assert canvas.layout.placements[0] == before
        assert canvas.layout.placements[1].x == 180

    def test_ids_do_not_collide_after_removal(self, canvas):
        canvas.add_from_library("input-form")
        canvas.add_from_library("proc-ai-agent")
        canvas.remove_node("user-node-1")
        node = canvas.add_from_library("output-email")
        assert node.id not in {"user-node-2"}
        assert len({n.id for n in canvas.nodes}) == 2

    def test_remove_shows_everything(self, canvas, survey_nodes):
        canvas.set_nodes(survey_nodes)
        canvas.remove_node("node-3")
        assert [n.id for n in canvas.nodes] == ["node-1", "node-2", "node-4", "node-5", "node-6"]
        assert canvas.reveal.nodes_revealed == 5
        assert canvas.reveal.connectors_revealed == 4

    def test_remove_unknown(self, canvas, survey_nodes):
        canvas.set_nodes(survey_nodes)
        with pytest.raises(KeyError):
            canvas.remove_node("node-99")

    def test_undo_add(self, canvas):
        canvas.add_from_library("input-form")
        canvas.add_from_library("proc-ai-agent")
        assert canvas.undo() is True
        assert [n.name for n in canvas.nodes] == ["Form / Survey"]
        assert canvas.reveal.nodes_revealed == 1
        assert canvas.reveal.is_terminal

    def test_undo_remove(self, canvas, survey_nodes):
        canvas.set_nodes(survey_nodes)
        canvas.remove_node("node-2")
        canvas.undo()
        assert [n.id for n in canvas.nodes] == [n.id for n in survey_nodes]

    def test_undo_with_empty_history(self, canvas):
        assert canvas.undo() is False

    def test_clear(self, canvas, survey_nodes):
        canvas.set_nodes(survey_nodes)
        reveal_all(canvas)
        canvas.clear()
        assert canvas.nodes == []
        assert canvas.can_undo is False
        assert canvas.reveal.nodes_revealed == 0
        assert canvas.reveal.node_count == 0


class TestOrderWarning:
    """Tests for the output-before-input/processing warning."""

    def test_output_first_warns(self, canvas):
        canvas.add_from_library("output-email")
        assert canvas.order_warning is True

    def test_output_without_processing_warns(self, canvas):
        canvas.add_from_library("input-form")
        canvas.add_from_library("output-email")
        assert canvas.order_warning is True

    def test_well_ordered_does_not_warn(self, canvas):
        canvas.add_from_library("input-form")
        canvas.add_from_library("proc-ai-agent")
        canvas.add_from_library("output-email")
        assert canvas.order_warning is False

    def test_dismissed_warning_stays_dismissed(self, canvas):
        canvas.add_from_library("output-email")
        canvas.dismiss_order_warning()
        canvas.add_from_library("output-pdf")
        assert canvas.order_warning is False


class TestComparisonView:
    """Tests for toggling between user and suggested workflows."""

    def test_suggestion_switches_view(self, canvas, survey_nodes, suggested_nodes):
        canvas.set_nodes(survey_nodes)
        canvas.set_suggestion(suggested_nodes)
        assert canvas.comparison_view == ComparisonView.AI
        assert [n.id for n in canvas.nodes] == [n.id for n in suggested_nodes]
        assert canvas.layout.node_count == 5
        assert canvas.reveal.node_count == 5
        assert canvas.reveal.nodes_revealed == 0

    def test_toggle_back_resets_reveal(self, canvas, survey_nodes, suggested_nodes):
        canvas.set_nodes(survey_nodes)
        canvas.set_suggestion(suggested_nodes)
        reveal_all(canvas)
        canvas.set_comparison_view(ComparisonView.USER)
        assert canvas.nodes == survey_nodes
        assert canvas.reveal.node_count == 6
        assert canvas.reveal.nodes_revealed == 0

    def test_toggle_accepts_string(self, canvas, survey_nodes, suggested_nodes):
        canvas.set_nodes(survey_nodes)
        canvas.set_suggestion(suggested_nodes)
        canvas.set_comparison_view("user")
        assert canvas.comparison_view == ComparisonView.USER

    def test_ai_view_requires_suggestion(self, canvas, survey_nodes):
        canvas.set_nodes(survey_nodes)
        with pytest.raises(InvalidArgumentError):
            canvas.set_comparison_view(ComparisonView.AI)

    def test_editing_drops_suggestion(self, canvas, survey_nodes, suggested_nodes):
        canvas.set_nodes(survey_nodes)
        canvas.set_suggestion(suggested_nodes)
        canvas.add_from_library("output-pdf")
        assert canvas.suggestion is None
        assert canvas.comparison_view == ComparisonView.USER
        assert len(canvas.nodes) == 7


class TestViewport:
    """Tests for resizing."""

    def test_resize_relayouts(self, canvas, survey_nodes):
        canvas.set_nodes(survey_nodes)
        assert canvas.layout.rows == 2
        canvas.set_viewport_width(600)
        assert canvas.layout.row_capacity == 2
        assert canvas.layout.rows == 3
        assert canvas.layout.dimensions == COMPACT_DIMENSIONS
        assert [p.direction for p in canvas.layout.placements[2:4]] == [
            Direction.RIGHT_TO_LEFT
        ] * 2

    def test_resize_preserves_reveal(self, canvas, survey_nodes):
        generation = canvas.set_nodes(survey_nodes)
        canvas.tick()
        canvas.tick()
        canvas.tick()
        canvas.set_viewport_width(800)
        assert canvas.reveal.nodes_revealed == 3
        assert canvas.reveal.connectors_revealed == 1
        assert canvas.reveal.generation == generation

    def test_resize_back_to_desktop(self, canvas, survey_nodes):
        canvas.set_nodes(survey_nodes)
        canvas.set_viewport_width(400)
        canvas.set_viewport_width(1400)
        assert canvas.layout.dimensions == DEFAULT_DIMENSIONS
        assert canvas.layout.row_capacity == 4


class TestCanvasFrame:
    """Tests for frames handed to renderers."""

    def test_frame_visibility(self, canvas, survey_nodes):
        canvas.set_nodes(survey_nodes)
        for _ in range(3):
            canvas.tick()
        frame = canvas.frame()
        assert isinstance(frame, CanvasFrame)
        assert [frame.is_node_visible(i) for i in range(6)] == [True] * 3 + [False] * 3
        assert [frame.is_connector_visible(i) for i in range(5)] == [True] + [False] * 4

    def test_frame_without_reveal_shows_everything(self, canvas, survey_nodes):
        canvas.set_nodes(survey_nodes)
        frame = CanvasFrame(layout=canvas.layout, nodes=canvas.nodes)
        assert all(frame.is_node_visible(i) for i in range(6))
        assert all(frame.is_connector_visible(i) for i in range(5))
        assert frame.is_node_visible(6) is False

    def test_frame_compact_flag(self, survey_nodes):
        canvas = WorkflowCanvas(viewport_width=400)
        canvas.set_nodes(survey_nodes)
        assert canvas.frame().compact is True


class TestDebugTrace:
    """Tests for trace collection."""

    def test_no_trace_by_default(self, canvas):
        assert canvas.get_trace() is None

    def test_trace_records_layout_and_reveal(self, survey_nodes):
        canvas = WorkflowCanvas(viewport_width=1280, debug=True)
        old = canvas.set_nodes(survey_nodes)
        canvas.tick()
        canvas.set_nodes(survey_nodes[:2])
        canvas.tick(old)

        trace = canvas.get_trace()
        positions = trace.get_stage("positions")
        assert positions.data["node_count"] == 2
        assert [e.kind for e in trace.reveal_events] == ["reset", "tick", "reset", "stale_tick"]
        assert trace.get_stage("viewport").data["row_capacity"] == 4

    def test_trace_add_node_is_seek(self):
        canvas = WorkflowCanvas(debug=True)
        canvas.add_node(WorkflowNode("a", "A", NodeLayer.INPUT))
        assert canvas.get_trace().get_events("seek")[0].nodes_revealed == 0

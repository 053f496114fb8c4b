"""Unit tests for the models module."""

import dataclasses

import pytest

from snakeflow.errors import InvalidArgumentError
from snakeflow.library import (
    LAYER_COLORS,
    NODE_LIBRARY,
    NODE_MAP,
    get_definition,
    nodes_for_layer,
)
from snakeflow.models import (
    Direction,
    LayoutDimensions,
    NodeLayer,
    NodePlacement,
    NodeStatus,
    WorkflowNode,
)


class TestNodePlacement:
    """Tests for NodePlacement."""

    def test_is_frozen(self):
        placement = NodePlacement(0, 0, 0, Direction.LEFT_TO_RIGHT, 0, 0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            placement.x = 10

    def test_direction_values(self):
        assert Direction.LEFT_TO_RIGHT.value == "ltr"
        assert Direction.RIGHT_TO_LEFT.value == "rtl"


class TestLayoutDimensions:
    """Tests for LayoutDimensions."""

    def test_strides(self):
        dims = LayoutDimensions(140, 72, 40, 40)
        assert dims.column_stride == 180
        assert dims.row_stride == 112

    def test_zero_gaps_allowed(self):
        dims = LayoutDimensions(10, 10, 0, 0)
        assert dims.column_stride == 10

    @pytest.mark.parametrize("values", [(0, 1, 1, 1), (1, 0, 1, 1), (1, 1, -1, 0), (1, 1, 0, -1)])
    def test_invalid(self, values):
        with pytest.raises(InvalidArgumentError):
            LayoutDimensions(*values)

    @pytest.mark.parametrize(
        "values",
        [
            (float("nan"), 72, 40, 40),
            (140, float("-inf"), 40, 40),
            (140, 72, float("nan"), 40),
            (140, 72, 40, "40"),
            (True, 72, 40, 40),
        ],
    )
    def test_non_finite_or_non_numeric(self, values):
        with pytest.raises(InvalidArgumentError):
            LayoutDimensions(*values)


class TestWorkflowNode:
    """Tests for WorkflowNode."""

    def test_from_dict(self):
        node = WorkflowNode.from_dict(
            {"id": "n1", "node_id": "proc-code", "name": "Code", "layer": "processing"}
        )
        assert node == WorkflowNode("n1", "Code", NodeLayer.PROCESSING, "proc-code")

    def test_to_dict_omits_missing_description(self):
        node = WorkflowNode("n1", "Code", NodeLayer.PROCESSING, "proc-code", NodeStatus.ADDED)
        assert node.to_dict() == {
            "id": "n1",
            "node_id": "proc-code",
            "name": "Code",
            "layer": "processing",
            "status": "added",
        }

    def test_description_survives_dict(self):
        node = WorkflowNode("n1", "Code", NodeLayer.PROCESSING, custom_description="Cleans data.")
        assert WorkflowNode.from_dict(node.to_dict()) == node

    def test_missing_field(self):
        with pytest.raises(KeyError):
            WorkflowNode.from_dict({"id": "n1", "name": "Code"})

    @pytest.mark.parametrize("name", [None, 42, ["Code"]])
    def test_name_must_be_string(self, name):
        """A null name must not become the display name "None"."""
        with pytest.raises(ValueError, match="name must be a string"):
            WorkflowNode.from_dict({"id": "n1", "name": name, "layer": "input"})

    def test_description_must_be_string(self):
        with pytest.raises(ValueError, match="custom_description"):
            WorkflowNode.from_dict(
                {"id": "n1", "name": "Code", "layer": "input", "custom_description": {"a": 1}}
            )

    def test_null_description_allowed(self):
        node = WorkflowNode.from_dict(
            {"id": "n1", "name": "Code", "layer": "input", "custom_description": None}
        )
        assert node.custom_description is None


class TestLibrary:
    """Tests for the node library."""

    def test_layer_sizes(self):
        assert len(nodes_for_layer(NodeLayer.INPUT)) == 12
        assert len(nodes_for_layer(NodeLayer.PROCESSING)) == 13
        assert len(nodes_for_layer(NodeLayer.OUTPUT)) == 14
        assert len(NODE_LIBRARY) == 39

    def test_ids_unique(self):
        assert len(NODE_MAP) == len(NODE_LIBRARY)

    def test_every_layer_has_colors(self):
        assert set(LAYER_COLORS) == set(NodeLayer)

    def test_get_definition(self):
        definition = get_definition("proc-human-review")
        assert definition.name == "Human Review"
        assert definition.layer == NodeLayer.PROCESSING

    def test_unknown_definition(self):
        with pytest.raises(KeyError, match="input-fax"):
            get_definition("input-fax")

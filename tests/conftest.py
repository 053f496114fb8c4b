"""Pytest configuration and shared fixtures for snakeflow tests."""

import pytest

from snakeflow import (
    LayoutDimensions,
    NodeLayer,
    NodeStatus,
    WorkflowCanvas,
    WorkflowNode,
    compute_positions,
)


@pytest.fixture
def desktop_dims():
    """Desktop node size and gaps."""
    return LayoutDimensions(140, 72, 40, 40)


@pytest.fixture
def six_positions():
    """Six nodes in rows of four at desktop size."""
    return compute_positions(6, 4, 140, 72, 40, 40)


@pytest.fixture
def survey_nodes():
    """A small input -> processing -> output workflow."""
    return [
        WorkflowNode("node-1", "Form / Survey", NodeLayer.INPUT, "input-form"),
        WorkflowNode("node-2", "Sentiment Analysis", NodeLayer.PROCESSING, "proc-sentiment"),
        WorkflowNode("node-3", "Summarizer", NodeLayer.PROCESSING, "proc-summarizer"),
        WorkflowNode("node-4", "Human Review", NodeLayer.PROCESSING, "proc-human-review"),
        WorkflowNode("node-5", "Database Insert", NodeLayer.OUTPUT, "output-database"),
        WorkflowNode("node-6", "Email Send", NodeLayer.OUTPUT, "output-email"),
    ]


@pytest.fixture
def suggested_nodes():
    """An AI suggestion with added and removed nodes."""
    return [
        WorkflowNode("node-1", "Form / Survey", NodeLayer.INPUT, "input-form"),
        WorkflowNode(
            "node-7", "Validator", NodeLayer.PROCESSING, "proc-validator", NodeStatus.ADDED
        ),
        WorkflowNode("node-2", "Sentiment Analysis", NodeLayer.PROCESSING, "proc-sentiment"),
        WorkflowNode(
            "node-3", "Summarizer", NodeLayer.PROCESSING, "proc-summarizer", NodeStatus.REMOVED
        ),
        WorkflowNode("node-5", "Database Insert", NodeLayer.OUTPUT, "output-database"),
    ]


@pytest.fixture
def canvas():
    """Empty desktop canvas."""
    return WorkflowCanvas(viewport_width=1280)


@pytest.fixture
def survey_payload():
    """Generation-service response wrapped in a markdown fence."""
    return """```json
{
  "workflow_name": "Survey Analysis Pipeline",
  "nodes": [
    {"id": "node-1", "node_id": "input-form", "name": "Form / Survey", "layer": "input"},
    {"id": "node-2", "node_id": "proc-sentiment", "name": "Sentiment Analysis", "layer": "processing"},
    {"id": "node-3", "node_id": "output-email", "name": "Email Send", "layer": "output"}
  ],
  "explanation": "Collect, analyse, deliver."
}
```"""

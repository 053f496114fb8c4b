#!/usr/bin/env python3
"""
Examples of using the workflow canvas.

Run this file to generate example diagrams as SVG and PNG files.
"""

import asyncio

from snakeflow import (
    AsyncRevealDriver,
    NodeLayer,
    NodeStatus,
    PNGRenderer,
    WorkflowCanvas,
    WorkflowNode,
    parse_nodes,
    render_to_svg,
)


def reveal_all(canvas):
    while not canvas.reveal.is_terminal:
        canvas.tick()


def example_from_payload():
    """Generated workflow payload, laid out for a desktop viewport"""
    print("Example 1: Generated Workflow")

    payload = """```json
    {
      "workflow_name": "Support Ticket Triage",
      "nodes": [
        {"id": "node-1", "node_id": "input-email", "name": "Email Inbox", "layer": "input"},
        {"id": "node-2", "node_id": "proc-classifier", "name": "Classifier", "layer": "processing"},
        {"id": "node-3", "node_id": "proc-sentiment", "name": "Sentiment Analysis", "layer": "processing"},
        {"id": "node-4", "node_id": "proc-filter", "name": "Filter / Router", "layer": "processing"},
        {"id": "node-5", "node_id": "output-slack", "name": "Slack Message", "layer": "output"},
        {"id": "node-6", "node_id": "output-crm", "name": "CRM Update", "layer": "output"}
      ]
    }
    ```"""

    canvas = WorkflowCanvas(viewport_width=1280)
    canvas.set_nodes(parse_nodes(payload))
    reveal_all(canvas)

    with open("example_triage.svg", "w", encoding="utf-8") as f:
        f.write(render_to_svg(canvas.frame()))
    print("  Saved: example_triage.svg\n")


def example_mobile():
    """Same workflow on a narrow viewport: two per row, compact boxes"""
    print("Example 2: Mobile Layout")

    canvas = WorkflowCanvas(viewport_width=390)
    for node_id in ("input-form", "proc-validator", "proc-summarizer", "proc-human-review", "output-pdf"):
        canvas.add_from_library(node_id)

    PNGRenderer(scale=2).render(canvas.frame(), "example_mobile.png")
    print(f"  Rows: {canvas.layout.rows}, compact: {canvas.frame().compact}")
    print("  Saved: example_mobile.png\n")


def example_comparison():
    """User workflow next to a suggested revision"""
    print("Example 3: Suggested Revision")

    user = [
        WorkflowNode("user-node-1", "Form / Survey", NodeLayer.INPUT, "input-form"),
        WorkflowNode("user-node-2", "Summarizer", NodeLayer.PROCESSING, "proc-summarizer"),
        WorkflowNode("user-node-3", "Email Send", NodeLayer.OUTPUT, "output-email"),
    ]
    suggestion = [
        user[0],
        WorkflowNode("node-2", "Validator", NodeLayer.PROCESSING, "proc-validator", NodeStatus.ADDED),
        user[1],
        WorkflowNode("user-node-3", "Email Send", NodeLayer.OUTPUT, "output-email", NodeStatus.REMOVED),
        WorkflowNode("node-4", "Dashboard", NodeLayer.OUTPUT, "output-dashboard", NodeStatus.ADDED),
    ]

    canvas = WorkflowCanvas(viewport_width=1280)
    canvas.set_nodes(user)
    canvas.set_suggestion(suggestion)
    reveal_all(canvas)
    PNGRenderer().render(canvas.frame(), "example_suggestion.png")
    print("  Saved: example_suggestion.png\n")


def example_animation():
    """Print every reveal step as the driver ticks"""
    print("Example 4: Reveal Animation")

    canvas = WorkflowCanvas(viewport_width=1280)
    for node_id in ("input-webhook", "proc-ai-agent", "output-database"):
        canvas.add_from_library(node_id)
    canvas.set_nodes(canvas.nodes)

    async def run():
        driver = AsyncRevealDriver(
            canvas.scheduler,
            on_tick=lambda s: print(f"  nodes={s.nodes_revealed} connectors={s.connectors_revealed}"),
        )
        driver.start()
        await driver.wait()

    asyncio.run(run())
    print()


if __name__ == "__main__":
    print("=" * 60)
    print("Workflow Canvas Examples")
    print("=" * 60 + "\n")

    example_from_payload()
    example_mobile()
    example_comparison()
    example_animation()

    print("=" * 60)
    print("All examples generated!")
    print("=" * 60)

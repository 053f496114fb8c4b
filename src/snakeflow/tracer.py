"""
Debug tracing for workflow canvases.

When a WorkflowCanvas is created with ``debug=True`` it records every
layout pass and every reveal step in a LayoutTrace. This is useful for:
1. Understanding why a node ended up where it did after a resize
2. Checking the order in which nodes and connectors were revealed
3. Writing targeted tests against intermediate states

Usage:
    >>> canvas = WorkflowCanvas(viewport_width=1280, debug=True)
    >>> canvas.set_nodes(nodes)
    >>> canvas.tick()
    >>> print(canvas.get_trace().summary())

The trace captures:
- Layout stages (viewport, positions, connectors) with their inputs
- Reveal events (reset, seek, tick) with the counters after each one
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RevealEvent:
    """
    Record of a single change to the reveal counters.

    Attributes:
        kind: "reset", "seek", "tick" or "stale_tick".
        generation: Generation token after the event.
        nodes_revealed: Visible nodes after the event.
        connectors_revealed: Visible connectors after the event.
    """

    kind: str
    generation: int
    nodes_revealed: int
    connectors_revealed: int

    def __str__(self) -> str:
        return (
            f"[gen {self.generation}] {self.kind}: "
            f"nodes={self.nodes_revealed} connectors={self.connectors_revealed}"
        )


@dataclass
class PipelineStage:
    """
    Snapshot of a layout stage.

    Attributes:
        name: Stage name (e.g. "positions").
        data: Relevant values at this stage.
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class LayoutTrace:
    """
    Complete trace of a canvas session.

    Attributes:
        stages: Layout stages in the order they ran.
        reveal_events: Reveal counter changes in the order they happened.
    """

    stages: List[PipelineStage] = field(default_factory=list)
    reveal_events: List[RevealEvent] = field(default_factory=list)

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        self.stages.append(PipelineStage(name, data.copy()))

    def add_reveal_event(
        self,
        kind: str,
        generation: int,
        nodes_revealed: int,
        connectors_revealed: int,
    ) -> None:
        self.reveal_events.append(
            RevealEvent(kind, generation, nodes_revealed, connectors_revealed)
        )

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get the most recent stage with the given name."""
        for stage in reversed(self.stages):
            if stage.name == name:
                return stage
        return None

    def get_events(self, kind: str) -> List[RevealEvent]:
        return [e for e in self.reveal_events if e.kind == kind]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the stage overview and reveal event counts.
        """
        lines = [
            "=" * 60,
            "LAYOUT TRACE SUMMARY",
            "=" * 60,
            "",
            f"Layout stages: {len(self.stages)}",
        ]
        for stage in self.stages:
            lines.append(f"  {stage.name}")

        lines.extend(["", f"Reveal events: {len(self.reveal_events)}"])
        counts: Dict[str, int] = {}
        for event in self.reveal_events:
            counts[event.kind] = counts.get(event.kind, 0) + 1
        for kind, count in sorted(counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {kind}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """Complete dump of all stages and reveal events."""
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("LAYOUT STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("REVEAL EVENTS:")
        lines.append("-" * 40)
        for event in self.reveal_events:
            lines.append(str(event))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())

"""
Parser for workflow node lists returned by a generation service.

Generation services answer with JSON, sometimes wrapped in a markdown code
fence. Three shapes are accepted:

    {"nodes": [...]}                  # auto-generated workflow
    {"suggested_workflow": [...]}     # feedback on a user workflow
    [...]                             # bare node list

Each item needs ``id``, ``name`` and ``layer``; ``node_id``, ``status`` and
``custom_description`` are optional.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .models import WorkflowNode

FENCE_PATTERN = re.compile(r"```(?:json)?\s*")

NODE_LIST_KEYS = ("nodes", "suggested_workflow")


class ParseError(Exception):
    """Raised when a node payload cannot be parsed."""

    pass


@dataclass
class ParseResult:
    """
    Result of parsing a node payload.

    Attributes:
        nodes: Parsed nodes in payload order.
        workflow_name: ``workflow_name`` field of the payload, if present.
        source_key: Key the node list was read from, or None for a bare list.
        extra: Remaining top-level fields, untouched.
    """

    nodes: List[WorkflowNode] = field(default_factory=list)
    workflow_name: Optional[str] = None
    source_key: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences (```json ... ```) around a payload."""
    return FENCE_PATTERN.sub("", text).strip()


class Parser:
    """Parses generation-service output into WorkflowNode lists."""

    def parse(self, text: str) -> List[WorkflowNode]:
        """
        Parse payload text and return its nodes.

        Raises:
            ParseError: If the text is not valid JSON or a node is malformed.
        """
        return self.parse_result(text).nodes

    def parse_result(self, text: str) -> ParseResult:
        cleaned = strip_code_fences(text)
        if not cleaned:
            raise ParseError("Empty node payload")
        try:
            payload = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ParseError(
                f"Invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}"
            ) from exc
        return self.parse_payload(payload)

    def parse_payload(self, payload: Any) -> ParseResult:
        """
        Parse an already-decoded payload.

        Raises:
            ParseError: If no node list is found or a node is malformed.
        """
        if isinstance(payload, list):
            return ParseResult(nodes=self._parse_items(payload))

        if not isinstance(payload, dict):
            raise ParseError(
                f"Expected a JSON object or list, got {type(payload).__name__}"
            )

        for key in NODE_LIST_KEYS:
            if key in payload:
                items = payload[key]
                if not isinstance(items, list):
                    raise ParseError(f"'{key}' must be a list")
                extra = {k: v for k, v in payload.items() if k not in (key, "workflow_name")}
                return ParseResult(
                    nodes=self._parse_items(items),
                    workflow_name=payload.get("workflow_name"),
                    source_key=key,
                    extra=extra,
                )

        raise ParseError(
            f"No node list found; expected one of: {', '.join(NODE_LIST_KEYS)}"
        )

    def _parse_items(self, items: List[Any]) -> List[WorkflowNode]:
        nodes: List[WorkflowNode] = []
        seen_ids = set()
        for idx, item in enumerate(items):
            if not isinstance(item, dict):
                raise ParseError(f"Node {idx}: expected an object")
            try:
                node = WorkflowNode.from_dict(item)
            except KeyError as exc:
                raise ParseError(f"Node {idx}: missing field {exc.args[0]!r}") from exc
            except ValueError as exc:
                raise ParseError(f"Node {idx}: {exc}") from exc
            if node.id in seen_ids:
                raise ParseError(f"Node {idx}: duplicate id {node.id!r}")
            seen_ids.add(node.id)
            nodes.append(node)
        return nodes


def parse_nodes(text: str) -> List[WorkflowNode]:
    """
    Convenience function to parse a node payload.

    Args:
        text: JSON payload, optionally fenced.

    Returns:
        Parsed nodes.
    """
    parser = Parser()
    return parser.parse(text)

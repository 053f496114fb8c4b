"""
Catalog of node definitions a user can add to a workflow canvas.

Definitions are grouped into the three layers of a workflow: where data
comes from (input), what happens to it (processing) and where results go
(output). Each layer has a colour scheme used by the renderers.
"""

from dataclasses import dataclass
from typing import Dict, List

from .models import NodeLayer


@dataclass(frozen=True)
class NodeDefinition:
    """A node type from the library."""

    node_id: str
    name: str
    icon: str
    layer: NodeLayer
    description: str


@dataclass(frozen=True)
class LayerColors:
    """Colours for one layer: header band, accent text, tinted background, border."""

    band: str
    dark: str
    background: str
    border: str


LAYER_COLORS: Dict[NodeLayer, LayerColors] = {
    NodeLayer.INPUT: LayerColors("#A8F0E0", "#2BA89C", "#EDFBF7", "#A8F0E0"),
    NodeLayer.PROCESSING: LayerColors("#C3D0F5", "#5B6DC2", "#F0F3FC", "#C3D0F5"),
    NodeLayer.OUTPUT: LayerColors("#FBE8A6", "#C4A934", "#FEF9ED", "#FBE8A6"),
}


def _node(node_id, name, icon, layer, description):
    return NodeDefinition(node_id, name, icon, layer, description)


# fmt: off
NODE_LIBRARY: List[NodeDefinition] = [
    # Data input
    _node("input-excel", "Excel / CSV Upload", "FileSpreadsheet", NodeLayer.INPUT, "Receives data from uploaded spreadsheet files."),
    _node("input-gsheets", "Google Sheets", "Sheet", NodeLayer.INPUT, "Pulls data from a connected Google Sheets document."),
    _node("input-webhook", "HTTP Webhook", "Globe", NodeLayer.INPUT, "Triggered by an incoming HTTP request from another system."),
    _node("input-api", "API Endpoint", "Plug", NodeLayer.INPUT, "Pulls data from an external API on a schedule or trigger."),
    _node("input-form", "Form / Survey", "ClipboardList", NodeLayer.INPUT, "Receives responses from a form, survey, or questionnaire."),
    _node("input-email", "Email Trigger", "Mail", NodeLayer.INPUT, "Triggered when a specific email is received."),
    _node("input-schedule", "Scheduled Trigger", "Clock", NodeLayer.INPUT, "Runs the workflow on a recurring schedule (hourly, daily, weekly, monthly)."),
    _node("input-database", "Database Query", "Database", NodeLayer.INPUT, "Pulls data from an existing SQL or NoSQL database."),
    _node("input-file", "File Upload", "Upload", NodeLayer.INPUT, "Receives uploaded documents (PDF, Word, images)."),
    _node("input-crm", "CRM Record", "Users", NodeLayer.INPUT, "Triggered when a record is created or updated in your CRM."),
    _node("input-chat", "Chat / Message", "MessageSquare", NodeLayer.INPUT, "Triggered by a message in Slack, Teams, or a chatbot interface."),
    _node("input-transcript", "Transcript", "Mic", NodeLayer.INPUT, "Receives audio/video transcripts from meetings or recordings."),
    # Processing
    _node("proc-ai-agent", "AI Agent", "Bot", NodeLayer.PROCESSING, "Sends data to an AI agent for analysis, summarization, or generation."),
    _node("proc-ai-loop", "AI Loop", "Repeat", NodeLayer.PROCESSING, "Processes multiple items through an AI agent one at a time."),
    _node("proc-text-extract", "Text Extraction", "FileText", NodeLayer.PROCESSING, "Extracts structured text from PDFs, images, or documents using OCR or parsing."),
    _node("proc-code", "Code Transform", "Code", NodeLayer.PROCESSING, "Runs custom code to clean, format, or restructure data."),
    _node("proc-mapper", "Data Mapper", "GitBranch", NodeLayer.PROCESSING, "Maps fields from one format to another."),
    _node("proc-filter", "Filter / Router", "Filter", NodeLayer.PROCESSING, "Routes data down different paths based on conditions."),
    _node("proc-merge", "Merge / Combine", "Merge", NodeLayer.PROCESSING, "Combines data from multiple sources into a single dataset."),
    _node("proc-sentiment", "Sentiment Analysis", "Heart", NodeLayer.PROCESSING, "Analyzes text for positive, negative, or neutral sentiment."),
    _node("proc-classifier", "Classifier / Tagger", "Tag", NodeLayer.PROCESSING, "Categorizes or tags data based on AI or rule-based logic."),
    _node("proc-summarizer", "Summarizer", "AlignLeft", NodeLayer.PROCESSING, "Condenses long text into key points or executive summaries."),
    _node("proc-translate", "Translation", "Languages", NodeLayer.PROCESSING, "Translates text between languages."),
    _node("proc-validator", "Validator", "ShieldCheck", NodeLayer.PROCESSING, "Checks data quality, flags errors, and applies validation rules."),
    _node("proc-human-review", "Human Review", "UserCheck", NodeLayer.PROCESSING, "Pauses the workflow for a human to review and approve before continuing."),
    # Data output
    _node("output-excel", "Excel / CSV Export", "FileSpreadsheet", NodeLayer.OUTPUT, "Writes results to a spreadsheet file."),
    _node("output-gsheets", "Google Sheets", "Sheet", NodeLayer.OUTPUT, "Writes results to a Google Sheets document."),
    _node("output-database", "Database Insert", "Database", NodeLayer.OUTPUT, "Stores results in a SQL or NoSQL database."),
    _node("output-email", "Email Send", "Send", NodeLayer.OUTPUT, "Sends formatted results via email to specified recipients."),
    _node("output-slack", "Slack / Teams Message", "MessageSquare", NodeLayer.OUTPUT, "Posts results to a Slack channel or Microsoft Teams chat."),
    _node("output-pdf", "PDF Report", "FileText", NodeLayer.OUTPUT, "Generates a formatted PDF report from the processed data."),
    _node("output-word", "Word Document", "File", NodeLayer.OUTPUT, "Creates or updates a Word document."),
    _node("output-pptx", "PowerPoint", "Presentation", NodeLayer.OUTPUT, "Generates presentation slides from results."),
    _node("output-api", "API Response", "Plug", NodeLayer.OUTPUT, "Sends results back as an HTTP/API response to an external system."),
    _node("output-crm", "CRM Update", "Users", NodeLayer.OUTPUT, "Creates or updates records in your CRM."),
    _node("output-dashboard", "Dashboard Feed", "BarChart3", NodeLayer.OUTPUT, "Pushes data to a dashboard or visualization tool."),
    _node("output-notification", "Notification", "Bell", NodeLayer.OUTPUT, "Sends a push notification or alert."),
    _node("output-calendar", "Calendar Event", "Calendar", NodeLayer.OUTPUT, "Creates or updates calendar entries."),
    _node("output-kb", "Knowledge Base", "BookOpen", NodeLayer.OUTPUT, "Stores results in an internal knowledge base or wiki."),
]
# fmt: on

NODE_MAP: Dict[str, NodeDefinition] = {d.node_id: d for d in NODE_LIBRARY}


def nodes_for_layer(layer: NodeLayer) -> List[NodeDefinition]:
    """All library definitions in ``layer``, in catalog order."""
    return [d for d in NODE_LIBRARY if d.layer == layer]


def get_definition(node_id: str) -> NodeDefinition:
    """
    Look up a library definition.

    Raises:
        KeyError: If ``node_id`` is not in the library.
    """
    try:
        return NODE_MAP[node_id]
    except KeyError:
        raise KeyError(f"Unknown library node: {node_id!r}") from None

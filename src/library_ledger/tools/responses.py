"""Response envelopes shared by the Library Ledger MCP tools."""

from typing import Any


def error_response(message: str) -> dict[str, Any]:
    """Tool failure: a single text item flagged with ``isError``."""
    return {
        "isError": True,
        "content": [{"type": "text", "text": message}],
    }


def success_response(message: str, data: dict[str, Any]) -> dict[str, Any]:
    """Tool success: human-readable text plus structured data for follow-up calls."""
    return {
        "content": [{"type": "text", "text": message}],
        "data": data,
    }

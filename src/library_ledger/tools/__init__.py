"""
MCP tools for the Library Ledger.

Tools are the operations with side effects: registering books and members,
revising copy counts, lending and returning. Each module exposes
``build_*_tools(library)`` returning tool definitions (name, description,
input schema, handler) bound to one ``Library``.
"""

from typing import Any

from ..ledger.library import Library
from .catalog import build_catalog_tools
from .circulation import build_circulation_tools
from .membership import build_membership_tools


def build_all_tools(library: Library) -> list[dict[str, Any]]:
    """Every tool definition, bound to ``library``, for server registration."""
    return (
        build_catalog_tools(library)
        + build_membership_tools(library)
        + build_circulation_tools(library)
    )


__all__ = [
    "build_all_tools",
    "build_catalog_tools",
    "build_circulation_tools",
    "build_membership_tools",
]

"""Library Ledger MCP Resources

Resources are the read-only side of the server: catalog entries, members,
each member's loans, overdue loans and circulation statistics. Writes go
through tools. Each module exposes ``build_*_resources(library)`` returning
definitions bound to one ``Library``.
"""

from typing import Any

from ..ledger.library import Library
from .books import build_book_resources
from .circulation import build_circulation_resources
from .members import build_member_resources


def build_all_resources(library: Library) -> list[dict[str, Any]]:
    """Every resource definition, bound to ``library``, for server registration."""
    return (
        build_book_resources(library)
        + build_member_resources(library)
        + build_circulation_resources(library)
    )


__all__ = [
    "build_all_resources",
    "build_book_resources",
    "build_circulation_resources",
    "build_member_resources",
]

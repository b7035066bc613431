"""Circulation Resources - Overdue Loans and Statistics

Resources:
- library://circulation/overdue - outstanding loans past their due date
- library://stats/library - collection sizes and circulation counts

Both are evaluated against the clock at request time, so consecutive reads
can differ without any write in between.
"""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from ..ledger.library import Library

logger = logging.getLogger(__name__)


class OverdueEntry(BaseModel):
    """Entry in the overdue list."""

    book_id: int = Field(..., description="Catalog id of the overdue book")
    member_id: int = Field(..., description="Member holding the copy")
    due_date: datetime = Field(..., description="When the copy was due back")


async def get_overdue_handler(library: Library) -> dict[str, Any]:
    """Returns overdue loans in ledger order."""
    entries = [
        OverdueEntry(book_id=loan.book_id, member_id=loan.member_id, due_date=loan.due_date)
        for loan in library.get_overdue_books()
    ]
    logger.debug("MCP Resource Request - circulation/overdue: %d entries", len(entries))

    return {
        "overdue": [entry.model_dump(mode="json") for entry in entries],
        "count": len(entries),
    }


async def get_statistics_handler(library: Library) -> dict[str, Any]:
    """Returns aggregate library statistics."""
    return library.get_library_statistics().model_dump()


def build_circulation_resources(library: Library) -> list[dict[str, Any]]:
    """Resource definitions bound to ``library``."""

    async def get_overdue() -> dict[str, Any]:
        return await get_overdue_handler(library)

    async def get_statistics() -> dict[str, Any]:
        return await get_statistics_handler(library)

    return [
        {
            "uri": "library://circulation/overdue",
            "name": "Overdue Loans",
            "description": "Outstanding loans whose due date has passed",
            "mime_type": "application/json",
            "handler": get_overdue,
        },
        {
            "uri": "library://stats/library",
            "name": "Library Statistics",
            "description": (
                "Total books, total members, loans in circulation and overdue loans"
            ),
            "mime_type": "application/json",
            "handler": get_statistics,
        },
    ]

"""
Read models produced by the query engine.

These are derived views over the ledger, computed on demand; nothing here
is stored.
"""

from datetime import datetime
from typing import NamedTuple

from pydantic import BaseModel, Field


class OverdueLoan(NamedTuple):
    """An outstanding loan whose due date has passed."""

    book_id: int
    member_id: int
    due_date: datetime


class LibraryStatistics(BaseModel):
    """Aggregate circulation figures.

    ``total_books`` and ``total_members`` are collection sizes, not copy
    counts.
    """

    total_books: int = Field(..., description="Number of catalog entries", ge=0)
    total_members: int = Field(..., description="Number of registered members", ge=0)
    books_in_circulation: int = Field(..., description="Outstanding borrow records", ge=0)
    overdue_books_count: int = Field(
        ..., description="Outstanding borrow records past their due date", ge=0
    )

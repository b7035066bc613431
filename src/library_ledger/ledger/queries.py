"""
Read-only queries over the borrow ledger and catalog.

Nothing here mutates state. Time-dependent answers (overdue loans) sample
the ledger clock once per call, so every record in one answer is judged
against the same instant; two calls may disagree as time passes.
"""

import logging

from ..models import LibraryStatistics, OverdueLoan
from .state import LedgerState

logger = logging.getLogger(__name__)


class QueryEngine:
    """Derived views: loans per member, overdue loans, circulation totals."""

    def __init__(self, state: LedgerState):
        self.state = state

    def get_books_borrowed_by_member(self, member_id: int) -> list[int]:
        """
        Book ids of the member's outstanding loans, in ledger order.

        The same book id appears once per outstanding loan. Unknown member
        ids are not an error; they have no loans.
        """
        with self.state.transaction():
            return [
                record.book_id
                for record in self.state.borrows.values()
                if record.member_id == member_id and record.is_outstanding
            ]

    def get_overdue_books(self) -> list[OverdueLoan]:
        """Outstanding loans whose due date is before now, in ledger order."""
        with self.state.transaction():
            now = self.state.now()
            return [
                OverdueLoan(record.book_id, record.member_id, record.due_date)
                for record in self.state.borrows.values()
                if record.is_overdue(now)
            ]

    def get_library_statistics(self) -> LibraryStatistics:
        """Collection sizes plus outstanding and overdue loan counts (one pass)."""
        with self.state.transaction():
            now = self.state.now()
            in_circulation = 0
            overdue = 0
            for record in self.state.borrows.values():
                if not record.is_outstanding:
                    continue
                in_circulation += 1
                if record.due_date < now:
                    overdue += 1

            stats = LibraryStatistics(
                total_books=len(self.state.books),
                total_members=len(self.state.members),
                books_in_circulation=in_circulation,
                overdue_books_count=overdue,
            )

        logger.debug("Library statistics: %s", stats.model_dump())
        return stats

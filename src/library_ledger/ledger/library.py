"""
The Library facade: the ledger's public operation surface.

A ``Library`` owns one ``LedgerState`` and the four components built on it.
Hosts (the MCP server, tests, scripts) create a ``Library`` and pass it to
whatever needs it; there is no global instance.

Failures are reported as sentinels, never raised:
- unknown ids give ``None`` or ``False``
- lending a book with no copies gives ``None``
- returning a loan twice gives ``False``
"""

import logging
from datetime import timedelta

from ..config import get_config
from ..models import Book, BorrowRecord, LibraryStatistics, Member, OverdueLoan
from .borrowing import BorrowLedger
from .catalog import CatalogRepository
from .membership import MembershipRepository
from .queries import QueryEngine
from .state import Clock, LedgerState

logger = logging.getLogger(__name__)


class Library:
    """Catalog, membership, borrow ledger and queries over one shared state."""

    def __init__(
        self,
        state: LedgerState | None = None,
        clock: Clock | None = None,
        loan_period: timedelta | None = None,
    ):
        """
        Args:
            state: Existing state to wrap (e.g. restored from a snapshot).
                When given, ``clock`` and ``loan_period`` are ignored.
            clock: Source of "now"; defaults to ``datetime.now``
            loan_period: Time from borrow to due date; defaults to the
                configured ``loan_period_days``
        """
        if state is None:
            if loan_period is None:
                loan_period = get_config().loan_period
            state = LedgerState(clock=clock, loan_period=loan_period)

        self.state = state
        self.catalog = CatalogRepository(state)
        self.membership = MembershipRepository(state)
        self.ledger = BorrowLedger(state, self.catalog, self.membership)
        self.queries = QueryEngine(state)

    # === Catalog ===

    def add_book(self, title: str, author: str, isbn: str, copies: int) -> int:
        return self.catalog.add_book(title, author, isbn, copies)

    def get_book(self, book_id: int) -> Book | None:
        return self.catalog.get_book(book_id)

    def update_book_copies(self, book_id: int, new_total: int) -> bool:
        return self.catalog.update_book_copies(book_id, new_total)

    # === Membership ===

    def add_member(self, name: str, email: str) -> int:
        return self.membership.add_member(name, email)

    def get_member(self, member_id: int) -> Member | None:
        return self.membership.get_member(member_id)

    # === Circulation ===

    def borrow_book(self, book_id: int, member_id: int) -> int | None:
        return self.ledger.borrow_book(book_id, member_id)

    def return_book(self, borrow_id: int) -> bool:
        return self.ledger.return_book(borrow_id)

    def get_borrow_record(self, borrow_id: int) -> BorrowRecord | None:
        return self.ledger.get_record(borrow_id)

    # === Queries ===

    def get_books_borrowed_by_member(self, member_id: int) -> list[int]:
        return self.queries.get_books_borrowed_by_member(member_id)

    def get_overdue_books(self) -> list[OverdueLoan]:
        return self.queries.get_overdue_books()

    def get_library_statistics(self) -> LibraryStatistics:
        return self.queries.get_library_statistics()

    def __repr__(self) -> str:
        return f"Library({self.state!r})"

"""
In-memory store handle for the Library Ledger.

``LedgerState`` owns the three append-only collections (books, members,
borrow records), one id counter per collection, the clock, and the writer
lock. It is created empty, handed by reference to every repository, and
lives as long as the process (or until a snapshot replaces it).

There is no module-level instance: whoever builds a ``Library`` owns its
state.
"""

import logging
import threading
from collections.abc import Callable, Generator
from contextlib import contextmanager
from datetime import datetime, timedelta

from ..models import Book, BorrowRecord, Member

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_LOAN_PERIOD = timedelta(days=14)


class IdSequence:
    """Monotonic id counter for one collection.

    Ids are dense today (they match insertion order), but the counter is
    kept separately from collection size so ids are never reused even if
    removal is ever added.
    """

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("Id sequence cannot start below zero")
        self._next = start

    @property
    def next_value(self) -> int:
        """The id the next call to ``allocate()`` will return."""
        return self._next

    def allocate(self) -> int:
        value = self._next
        self._next += 1
        return value

    def __repr__(self) -> str:
        return f"IdSequence(next_value={self._next})"


class LedgerState:
    """
    Shared mutable state behind the catalog, membership and borrow ledger.

    Collections are keyed by id and kept in insertion order (``dict``
    preserves it), which is also the ledger order used by queries.

    All reads and writes go through ``transaction()``, which holds a
    re-entrant lock so one operation's checks and mutations never interleave
    with another's.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        loan_period: timedelta = DEFAULT_LOAN_PERIOD,
    ):
        if loan_period <= timedelta(0):
            raise ValueError("Loan period must be positive")

        self.clock: Clock = clock or datetime.now
        self.loan_period = loan_period

        self.books: dict[int, Book] = {}
        self.members: dict[int, Member] = {}
        self.borrows: dict[int, BorrowRecord] = {}

        self.book_ids = IdSequence()
        self.member_ids = IdSequence()
        self.borrow_ids = IdSequence()

        self._lock = threading.RLock()

    def now(self) -> datetime:
        """Sample the clock. Operations call this once and reuse the value."""
        return self.clock()

    @contextmanager
    def transaction(self) -> Generator["LedgerState", None, None]:
        """
        Serialize access to the ledger.

        Example:
            ```python
            with state.transaction():
                book = state.books.get(book_id)
                ...
            ```

        Mutating operations check every precondition before touching any
        collection, so leaving the block early leaves state unchanged.
        """
        with self._lock:
            yield self

    def __repr__(self) -> str:
        return (
            f"LedgerState(books={len(self.books)}, members={len(self.members)}, "
            f"borrows={len(self.borrows)})"
        )

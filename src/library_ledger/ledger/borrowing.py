"""
Borrow ledger for the Library Ledger.

This is the lending state machine. Each borrow record starts OUTSTANDING and
can move once to RETURNED. Every transition is paired with a change to the
book's ``available_copies``:

1. borrow: new OUTSTANDING record, available copies - 1
2. return: record becomes RETURNED, available copies + 1

Both steps run inside a single state transaction and check all of their
preconditions before mutating anything, so an operation either applies in
full or leaves the ledger untouched. As long as no shrinking copy update
intervenes, this keeps ``total_copies - available_copies`` equal to the
number of outstanding records for each book.

Two flavours of each operation are provided:
- ``lend`` / ``reclaim`` raise ``NotFoundError`` or
  ``PreconditionFailedError`` and are used where the reason matters
- ``borrow_book`` / ``return_book`` report failure as ``None`` / ``False``
"""

import logging

from ..models import BorrowRecord
from .catalog import CatalogRepository
from .errors import LedgerError, NotFoundError, PreconditionFailedError
from .membership import MembershipRepository
from .state import LedgerState

logger = logging.getLogger(__name__)


class BorrowLedger:
    """Owns borrow records and drives copy availability in the catalog."""

    def __init__(
        self,
        state: LedgerState,
        catalog: CatalogRepository,
        membership: MembershipRepository,
    ):
        self.state = state
        self.catalog = catalog
        self.membership = membership

    def lend(self, book_id: int, member_id: int) -> BorrowRecord:
        """
        Lend one copy of a book to a member.

        Checks run book first, then member, then availability. The clock is
        read once and used for both the borrow and due dates.

        Returns:
            A copy of the new OUTSTANDING record

        Raises:
            NotFoundError: If the book or the member does not exist
            PreconditionFailedError: If the book has no available copies
        """
        with self.state.transaction():
            book = self.catalog.require_book(book_id)
            self.membership.require_member(member_id)

            if not book.is_available:
                raise PreconditionFailedError(
                    f"Book unavailable for borrowing - no copies of '{book.title}' available"
                )

            now = self.state.now()
            record = BorrowRecord(
                id=self.state.borrow_ids.next_value,
                book_id=book_id,
                member_id=member_id,
                borrow_date=now,
                due_date=now + self.state.loan_period,
            )

            self.state.borrow_ids.allocate()
            self.catalog.take_copy(book_id)
            self.state.borrows[record.id] = record

            logger.debug(
                "Lent book %d to member %d as borrow %d (due %s)",
                book_id,
                member_id,
                record.id,
                record.due_date.isoformat(),
            )
            return record.model_copy()

    def reclaim(self, borrow_id: int) -> BorrowRecord:
        """
        Take back the copy lent under ``borrow_id``.

        Returns:
            A copy of the record, now RETURNED

        Raises:
            NotFoundError: If the borrow id is unknown
            PreconditionFailedError: If the record was already returned
        """
        with self.state.transaction():
            record = self.state.borrows.get(borrow_id)
            if record is None:
                raise NotFoundError(f"Borrow record {borrow_id} not found")

            if not record.is_outstanding:
                raise PreconditionFailedError(
                    f"Borrow record {borrow_id} was already returned on "
                    f"{record.return_date.isoformat()}"
                )

            self.catalog.require_book(record.book_id)

            # return_date >= borrow_date, even if the clock stepped back
            now = self.state.now()
            if now < record.borrow_date:
                logger.warning(
                    "Clock reads %s, before borrow %d was made (%s); "
                    "recording the return at the borrow date",
                    now.isoformat(),
                    borrow_id,
                    record.borrow_date.isoformat(),
                )
                now = record.borrow_date

            record.mark_returned(now)
            self.catalog.release_copy(record.book_id)

            logger.debug("Borrow %d returned (book %d)", borrow_id, record.book_id)
            return record.model_copy()

    def borrow_book(self, book_id: int, member_id: int) -> int | None:
        """Lend a copy and return the new borrow id, or None if rejected."""
        try:
            return self.lend(book_id, member_id).id
        except LedgerError as e:
            logger.info("Borrow rejected: %s", e)
            return None

    def return_book(self, borrow_id: int) -> bool:
        """Return a loan. False for unknown or already returned records."""
        try:
            self.reclaim(borrow_id)
        except LedgerError as e:
            logger.info("Return rejected: %s", e)
            return False
        return True

    def get_record(self, borrow_id: int) -> BorrowRecord | None:
        with self.state.transaction():
            record = self.state.borrows.get(borrow_id)
            return record.model_copy() if record is not None else None

    def records(self) -> list[BorrowRecord]:
        """All borrow records in ledger order."""
        with self.state.transaction():
            return [record.model_copy() for record in self.state.borrows.values()]

"""
Snapshot save/restore for the Library Ledger.

A snapshot is a verbatim copy of a ``LedgerState``: every book, member and
borrow record plus the next id of each collection. Saving replaces the
previous snapshot in a single transaction; loading rebuilds a fresh state
whose id counters resume where the saved ones stopped.
"""

import logging
from datetime import timedelta

from sqlalchemy import delete, func, select

from ..ledger.state import DEFAULT_LOAN_PERIOD, Clock, IdSequence, LedgerState
from ..models import Book, BorrowRecord, Member
from .schema import BookRow, BorrowRow, IdSequenceRow, MemberRow
from .session import SnapshotManager

logger = logging.getLogger(__name__)

BOOK_SEQUENCE = "books"
MEMBER_SEQUENCE = "members"
BORROW_SEQUENCE = "borrows"


def save_snapshot(state: LedgerState, manager: SnapshotManager) -> None:
    """
    Write the whole ledger to the snapshot database.

    The in-memory state is copied under its lock, so the snapshot is a
    consistent point-in-time image even if writers are active.
    """
    with state.transaction():
        books = [book.model_copy() for book in state.books.values()]
        members = list(state.members.values())
        borrows = [record.model_copy() for record in state.borrows.values()]
        sequences = {
            BOOK_SEQUENCE: state.book_ids.next_value,
            MEMBER_SEQUENCE: state.member_ids.next_value,
            BORROW_SEQUENCE: state.borrow_ids.next_value,
        }

    manager.init_database()
    with manager.session_scope() as session:
        # Children first so foreign keys never dangle
        session.execute(delete(BorrowRow))
        session.execute(delete(MemberRow))
        session.execute(delete(BookRow))
        session.execute(delete(IdSequenceRow))

        session.add_all(BookRow(**book.model_dump()) for book in books)
        session.add_all(MemberRow(**member.model_dump()) for member in members)
        session.flush()
        session.add_all(BorrowRow(**record.model_dump()) for record in borrows)
        session.add_all(
            IdSequenceRow(name=name, next_value=value) for name, value in sequences.items()
        )

    logger.info(
        "Saved snapshot: %d books, %d members, %d borrow records",
        len(books),
        len(members),
        len(borrows),
    )


def has_snapshot(manager: SnapshotManager) -> bool:
    """True if the database holds a saved snapshot."""
    manager.init_database()
    with manager.session_scope() as session:
        count = session.execute(select(func.count()).select_from(IdSequenceRow)).scalar()
    return bool(count)


def load_snapshot(
    manager: SnapshotManager,
    clock: Clock | None = None,
    loan_period: timedelta = DEFAULT_LOAN_PERIOD,
) -> LedgerState:
    """
    Rebuild a ``LedgerState`` from the snapshot database.

    An empty database yields an empty state.
    """
    state = LedgerState(clock=clock, loan_period=loan_period)

    manager.init_database()
    with manager.session_scope() as session:
        for row in session.execute(select(BookRow).order_by(BookRow.id)).scalars():
            state.books[row.id] = Book.model_validate(row, from_attributes=True)

        for row in session.execute(select(MemberRow).order_by(MemberRow.id)).scalars():
            state.members[row.id] = Member.model_validate(row, from_attributes=True)

        for row in session.execute(select(BorrowRow).order_by(BorrowRow.id)).scalars():
            state.borrows[row.id] = BorrowRecord.model_validate(row, from_attributes=True)

        sequences = {
            row.name: row.next_value for row in session.execute(select(IdSequenceRow)).scalars()
        }

    state.book_ids = _restore_sequence(sequences.get(BOOK_SEQUENCE), state.books)
    state.member_ids = _restore_sequence(sequences.get(MEMBER_SEQUENCE), state.members)
    state.borrow_ids = _restore_sequence(sequences.get(BORROW_SEQUENCE), state.borrows)

    logger.info("Loaded snapshot: %r", state)
    return state


def _restore_sequence(stored: int | None, collection: dict[int, object]) -> IdSequence:
    # Never hand out an id that is already in use, whatever the stored value says.
    floor = max(collection, default=-1) + 1
    return IdSequence(max(stored or 0, floor))

"""
Tests for the borrow ledger state machine.

These tests verify:
1. Borrowing creates exactly one record and one decrement, or nothing
2. Returning closes a record exactly once
3. Conservation: total - available == outstanding records per book
4. The clock is read once per operation
"""

from datetime import timedelta

import pytest

from library_ledger.ledger import NotFoundError, PreconditionFailedError
from library_ledger.models import BorrowStatus


class TestLend:
    """Test the raising lend operation."""

    def test_lend_creates_outstanding_record(self, stocked_library, clock):
        record = stocked_library.ledger.lend(0, 0)

        assert record.id == 0
        assert record.book_id == 0
        assert record.member_id == 0
        assert record.borrow_date == clock.current
        assert record.due_date == clock.current + timedelta(days=14)
        assert record.due_date - record.borrow_date == timedelta(seconds=1_209_600)
        assert record.status == BorrowStatus.OUTSTANDING
        assert stocked_library.get_book(0).available_copies == 1

    def test_lend_samples_clock_once(self, stocked_library, clock):
        calls_before = clock.calls

        stocked_library.ledger.lend(0, 0)

        assert clock.calls - calls_before == 1

    def test_unknown_book(self, stocked_library):
        with pytest.raises(NotFoundError, match="Book 9"):
            stocked_library.ledger.lend(9, 0)

    def test_unknown_member(self, stocked_library):
        with pytest.raises(NotFoundError, match="Member 9"):
            stocked_library.ledger.lend(0, 9)

    def test_book_checked_before_member(self, stocked_library):
        with pytest.raises(NotFoundError, match="Book"):
            stocked_library.ledger.lend(9, 9)

    def test_missing_member_reported_before_availability(self, stocked_library):
        stocked_library.update_book_copies(1, 0)

        with pytest.raises(NotFoundError):
            stocked_library.ledger.lend(1, 9)

    def test_no_copies(self, stocked_library):
        stocked_library.ledger.lend(1, 0)

        with pytest.raises(PreconditionFailedError, match="Solaris"):
            stocked_library.ledger.lend(1, 1)


class TestBorrowBook:
    """Test the sentinel borrow_book operation."""

    def test_returns_sequential_ids(self, stocked_library):
        assert stocked_library.borrow_book(0, 0) == 0
        assert stocked_library.borrow_book(1, 1) == 1
        assert stocked_library.borrow_book(0, 1) == 2

    @pytest.mark.parametrize(
        ("book_id", "member_id"),
        [(9, 0), (0, 9), (9, 9), (-1, 0), (0, -1)],
    )
    def test_invalid_ids_change_nothing(self, stocked_library, book_id, member_id):
        assert stocked_library.borrow_book(book_id, member_id) is None

        assert stocked_library.state.borrows == {}
        assert stocked_library.state.borrow_ids.next_value == 0
        assert stocked_library.get_book(0).available_copies == 2
        assert stocked_library.get_book(1).available_copies == 1

    def test_no_copies_changes_nothing(self, stocked_library):
        assert stocked_library.borrow_book(1, 0) == 0

        assert stocked_library.borrow_book(1, 1) is None

        assert len(stocked_library.state.borrows) == 1
        assert stocked_library.state.borrow_ids.next_value == 1
        assert stocked_library.get_book(1).available_copies == 0

    def test_zero_copy_book_never_lends(self, stocked_library):
        book_id = stocked_library.add_book("Unavailable", "Nobody", "0", 0)

        for _ in range(3):
            assert stocked_library.borrow_book(book_id, 0) is None

        assert stocked_library.get_book(book_id).available_copies == 0

    def test_failed_borrow_does_not_consume_an_id(self, stocked_library):
        stocked_library.borrow_book(9, 0)

        assert stocked_library.borrow_book(0, 0) == 0

    def test_same_member_can_hold_several_copies(self, stocked_library):
        assert stocked_library.borrow_book(0, 0) == 0
        assert stocked_library.borrow_book(0, 0) == 1

        assert stocked_library.get_book(0).available_copies == 0


class TestReturnBook:
    """Test the return transition."""

    def test_return_closes_record(self, stocked_library, clock):
        borrow_id = stocked_library.borrow_book(0, 0)
        returned_at = clock.advance(days=3)

        assert stocked_library.return_book(borrow_id) is True

        record = stocked_library.get_borrow_record(borrow_id)
        assert record.status == BorrowStatus.RETURNED
        assert record.return_date == returned_at
        assert stocked_library.get_book(0).available_copies == 2

    def test_second_return_rejected(self, stocked_library, clock):
        borrow_id = stocked_library.borrow_book(0, 0)
        stocked_library.return_book(borrow_id)
        first_return = stocked_library.get_borrow_record(borrow_id).return_date
        clock.advance(days=1)

        assert stocked_library.return_book(borrow_id) is False

        assert stocked_library.get_borrow_record(borrow_id).return_date == first_return
        assert stocked_library.get_book(0).available_copies == 2

    def test_reclaim_twice_raises_precondition(self, stocked_library):
        borrow_id = stocked_library.borrow_book(0, 0)
        stocked_library.ledger.reclaim(borrow_id)

        with pytest.raises(PreconditionFailedError, match="already returned"):
            stocked_library.ledger.reclaim(borrow_id)

    @pytest.mark.parametrize("borrow_id", [-1, 0, 7])
    def test_unknown_borrow_id(self, stocked_library, borrow_id):
        assert stocked_library.return_book(borrow_id) is False

        with pytest.raises(NotFoundError):
            stocked_library.ledger.reclaim(borrow_id)

    def test_returned_copy_can_be_lent_again(self, stocked_library):
        first = stocked_library.borrow_book(1, 0)
        assert stocked_library.borrow_book(1, 1) is None

        stocked_library.return_book(first)

        assert stocked_library.borrow_book(1, 1) == 1

    def test_clock_stepped_back_before_borrow(self, stocked_library, clock, outstanding_count):
        borrow_id = stocked_library.borrow_book(1, 0)
        borrowed_at = clock.current
        clock.advance(hours=-1)

        assert stocked_library.return_book(borrow_id) is True

        record = stocked_library.get_borrow_record(borrow_id)
        assert record.status == BorrowStatus.RETURNED
        assert record.return_date == borrowed_at
        assert stocked_library.get_book(1).available_copies == 1
        assert outstanding_count(stocked_library, 1) == 0

        clock.advance(hours=2)
        assert stocked_library.return_book(borrow_id) is False
        assert stocked_library.get_book(1).available_copies == 1

    def test_return_after_shrink_increments_without_cap(self, stocked_library):
        """Loans outstanding through a shrink still return their copy."""
        loans = [stocked_library.borrow_book(0, 0), stocked_library.borrow_book(0, 1)]
        stocked_library.update_book_copies(0, 1)

        for borrow_id in loans:
            assert stocked_library.return_book(borrow_id) is True

        book = stocked_library.get_book(0)
        assert book.total_copies == 1
        assert book.available_copies == 2


class TestConservation:
    """Copy counters always match outstanding records when no shrink is applied."""

    def test_counters_follow_a_mixed_sequence(self, stocked_library, outstanding_count):
        steps = [
            ("borrow", 0, 0),
            ("borrow", 0, 1),
            ("borrow", 1, 0),
            ("borrow", 0, 0),  # rejected: no copies
            ("return", 0),
            ("return", 0),  # rejected: already returned
            ("borrow", 0, 1),
            ("grow", 0, 4),
            ("borrow", 0, 0),
            ("return", 2),
            ("return", 9),  # rejected: unknown
        ]

        for step in steps:
            if step[0] == "borrow":
                stocked_library.borrow_book(step[1], step[2])
            elif step[0] == "return":
                stocked_library.return_book(step[1])
            else:
                stocked_library.update_book_copies(step[1], step[2])

            for book_id in (0, 1):
                book = stocked_library.get_book(book_id)
                assert 0 <= book.available_copies <= book.total_copies
                assert book.total_copies - book.available_copies == outstanding_count(
                    stocked_library, book_id
                )

    def test_records_are_never_deleted(self, stocked_library):
        ids = [stocked_library.borrow_book(0, 0), stocked_library.borrow_book(1, 1)]
        for borrow_id in ids:
            stocked_library.return_book(borrow_id)

        records = stocked_library.ledger.records()

        assert [record.id for record in records] == ids
        assert all(record.status == BorrowStatus.RETURNED for record in records)


class TestClockSampling:
    """Each operation reads the clock exactly once."""

    def test_reclaim(self, stocked_library, clock):
        borrow_id = stocked_library.borrow_book(0, 0)
        calls_before = clock.calls

        stocked_library.ledger.reclaim(borrow_id)

        assert clock.calls - calls_before == 1

    def test_overdue_query(self, stocked_library, clock):
        stocked_library.borrow_book(0, 0)
        stocked_library.borrow_book(0, 1)
        stocked_library.borrow_book(1, 0)
        clock.advance(days=20)
        calls_before = clock.calls

        assert len(stocked_library.get_overdue_books()) == 3
        assert clock.calls - calls_before == 1

    def test_statistics_query(self, stocked_library, clock):
        stocked_library.borrow_book(0, 0)
        stocked_library.borrow_book(1, 1)
        clock.advance(days=20)
        calls_before = clock.calls

        assert stocked_library.get_library_statistics().overdue_books_count == 2
        assert clock.calls - calls_before == 1

"""
Catalog repository for the Library Ledger.

Owns ``Book`` entries. Besides registration and lookup it carries the copy
accounting rules: how a revised total feeds into the available pool, and
the take/release steps the borrow ledger uses when lending and reclaiming.
"""

import logging

from ..models import Book
from .errors import NotFoundError, PreconditionFailedError
from .state import LedgerState

logger = logging.getLogger(__name__)


class CatalogRepository:
    """Append-only store of books, identified by sequential id."""

    def __init__(self, state: LedgerState):
        self.state = state

    def add_book(self, title: str, author: str, isbn: str, copies: int) -> int:
        """
        Register a new book with all of its copies available.

        ``copies`` may be zero: the book is then listed but cannot be lent.

        Returns:
            The new book id
        """
        if copies < 0:
            raise ValueError("Copies cannot be negative")

        with self.state.transaction():
            book_id = self.state.book_ids.allocate()
            self.state.books[book_id] = Book(
                id=book_id,
                title=title,
                author=author,
                isbn=isbn,
                total_copies=copies,
                available_copies=copies,
            )

        logger.debug("Added book %d '%s' with %d copies", book_id, title, copies)
        return book_id

    def get_book(self, book_id: int) -> Book | None:
        """Return a copy of the book, or None if the id was never assigned."""
        with self.state.transaction():
            book = self.state.books.get(book_id)
            return book.model_copy() if book is not None else None

    def require_book(self, book_id: int) -> Book:
        """
        Return the stored book for in-repository use.

        Raises:
            NotFoundError: If the id is unknown
        """
        book = self.state.books.get(book_id)
        if book is None:
            raise NotFoundError(f"Book {book_id} not found")
        return book

    def update_book_copies(self, book_id: int, new_total: int) -> bool:
        """
        Revise the number of copies the library owns.

        Growing the total makes the extra copies available immediately.
        Shrinking it removes copies from the available pool first and stops
        at zero; copies on loan are never recalled. When more copies are on
        loan than the new total allows, ``total - available`` no longer
        matches the outstanding loans. That is accepted policy and is logged
        as a warning.

        Returns:
            False if the book id is unknown or the total is negative,
            True otherwise
        """
        if new_total < 0:
            logger.info(
                "Copy update rejected - negative total %d for book %d", new_total, book_id
            )
            return False

        with self.state.transaction():
            book = self.state.books.get(book_id)
            if book is None:
                logger.info("Copy update rejected - book %d not found", book_id)
                return False

            old_total = book.total_copies
            available = book.available_copies
            if new_total > old_total:
                available += new_total - old_total
            else:
                available -= min(old_total - new_total, available)

            on_loan = book.checked_out_copies
            self.state.books[book_id] = book.model_copy(
                update={"total_copies": new_total, "available_copies": available}
            )

        if on_loan > new_total:
            logger.warning(
                "Book %d shrunk to %d copies while %d are on loan; "
                "loans are kept and availability is floored at zero",
                book_id,
                new_total,
                on_loan,
            )
        logger.debug(
            "Book %d copies updated: total %d -> %d, available %d",
            book_id,
            old_total,
            new_total,
            available,
        )
        return True

    def take_copy(self, book_id: int) -> Book:
        """
        Remove one copy from the available pool.

        Callers must already hold the state transaction.

        Raises:
            NotFoundError: If the id is unknown
            PreconditionFailedError: If no copy is available
        """
        book = self.require_book(book_id)
        if not book.is_available:
            raise PreconditionFailedError(f"No copies of '{book.title}' are available")

        updated = book.model_copy(update={"available_copies": book.available_copies - 1})
        self.state.books[book_id] = updated
        return updated

    def release_copy(self, book_id: int) -> Book:
        """
        Put one copy back into the available pool.

        Callers must already hold the state transaction.

        Raises:
            NotFoundError: If the id is unknown
        """
        book = self.require_book(book_id)
        updated = book.model_copy(update={"available_copies": book.available_copies + 1})
        self.state.books[book_id] = updated
        return updated

    def list_books(self) -> list[Book]:
        """All books in registration order."""
        with self.state.transaction():
            return [book.model_copy() for book in self.state.books.values()]

    def count(self) -> int:
        with self.state.transaction():
            return len(self.state.books)

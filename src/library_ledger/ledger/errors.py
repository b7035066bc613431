"""
Exceptions raised by the ledger repositories.

The public sentinel API (``Library.borrow_book`` returning ``None`` and so
on) never lets these escape. They exist so the tool layer can tell the
caller *why* an operation was rejected, the same way repository exceptions
become ``isError`` responses.
"""


class LedgerError(Exception):
    """Base exception for ledger operations."""


class NotFoundError(LedgerError):
    """Raised when a book, member or borrow record id is unknown."""


class PreconditionFailedError(LedgerError):
    """Raised when an operation is not allowed in the current state.

    Examples: lending a book with no available copies, returning a loan that
    was already returned.
    """

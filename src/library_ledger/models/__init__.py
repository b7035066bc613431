"""
Library Ledger models.

Pydantic models for the entities the ledger stores and the views it derives:

- Book: catalog entries with copy counters
- Member: registered borrowers
- BorrowRecord: one loan of one copy, outstanding until returned
- OverdueLoan, LibraryStatistics: query results
"""

from .book import Book
from .borrow import BorrowRecord, BorrowStatus
from .member import Member
from .stats import LibraryStatistics, OverdueLoan

__all__ = [
    "Book",
    "BorrowRecord",
    "BorrowStatus",
    "LibraryStatistics",
    "Member",
    "OverdueLoan",
]

"""
Ledger package for the Library Ledger.

- state.py: the store handle (collections, id counters, clock, lock)
- catalog.py / membership.py: append-only record stores
- borrowing.py: the lending state machine
- queries.py: read-only derived views
- library.py: the facade exposing the public operations
"""

from .borrowing import BorrowLedger
from .catalog import CatalogRepository
from .errors import LedgerError, NotFoundError, PreconditionFailedError
from .library import Library
from .membership import MembershipRepository
from .queries import QueryEngine
from .state import DEFAULT_LOAN_PERIOD, Clock, IdSequence, LedgerState

__all__ = [
    "DEFAULT_LOAN_PERIOD",
    "BorrowLedger",
    "CatalogRepository",
    "Clock",
    "IdSequence",
    "LedgerError",
    "LedgerState",
    "Library",
    "MembershipRepository",
    "NotFoundError",
    "PreconditionFailedError",
    "QueryEngine",
]

"""
Snapshot persistence for the Library Ledger.

The ledger runs in memory; this package copies it to and from a SQL
database (SQLite by default) so its contents and id assignment survive
restarts.

- schema.py: SQLAlchemy tables mirroring the in-memory collections
- session.py: engine and session management
- snapshot.py: save and load a whole ``LedgerState``
"""

from .schema import Base, BookRow, BorrowRow, IdSequenceRow, MemberRow
from .session import SnapshotManager
from .snapshot import has_snapshot, load_snapshot, save_snapshot

__all__ = [
    "Base",
    "BookRow",
    "BorrowRow",
    "IdSequenceRow",
    "MemberRow",
    "SnapshotManager",
    "has_snapshot",
    "load_snapshot",
    "save_snapshot",
]

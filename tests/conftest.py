"""Test configuration and fixtures for the Library Ledger.

Fixtures provide:
1. A controllable clock, so due dates and overdue checks are deterministic
2. Fresh ``Library`` instances (empty and pre-stocked)
3. Isolated configuration and snapshot databases per test
"""

from collections.abc import Generator
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from library_ledger.config import LedgerConfig, reset_config
from library_ledger.ledger import Library
from library_ledger.persistence import SnapshotManager

LOAN_PERIOD = timedelta(days=14)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return self.current

    def advance(self, **kwargs: float) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


# === Ledger Fixtures ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 1, 9, 0, 0))


@pytest.fixture
def library(clock: FakeClock) -> Library:
    """An empty library on the fake clock with the standard 14-day loan."""
    return Library(clock=clock, loan_period=LOAN_PERIOD)


@pytest.fixture
def stocked_library(library: Library) -> Library:
    """Library with two books and two members.

    - book 0: "Dune", 2 copies
    - book 1: "Solaris", 1 copy
    - member 0: Alice, member 1: Bob
    """
    library.add_book("Dune", "Frank Herbert", "978-0441013593", 2)
    library.add_book("Solaris", "Stanislaw Lem", "978-0156027601", 1)
    library.add_member("Alice", "alice@example.com")
    library.add_member("Bob", "bob@example.com")
    return library


@pytest.fixture
def outstanding_count():
    """Count outstanding borrow records for one book, read straight from the state."""

    def count(library: Library, book_id: int) -> int:
        return sum(
            1
            for record in library.state.borrows.values()
            if record.book_id == book_id and record.is_outstanding
        )

    return count


# === Configuration Fixtures ===


@pytest.fixture
def test_config(tmp_path: Path) -> Generator[LedgerConfig, None, None]:
    """Test-specific configuration with an isolated snapshot file."""
    reset_config()

    config = LedgerConfig(
        server_name="test-library-ledger",
        server_version="0.0.1-test",
        snapshot_path=tmp_path / "ledger.db",
        debug=True,
        log_level="DEBUG",
    )

    yield config

    reset_config()


# === Snapshot Fixtures ===


@pytest.fixture
def snapshot_manager(tmp_path: Path) -> Generator[SnapshotManager, None, None]:
    """Snapshot manager backed by a temporary SQLite file."""
    manager = SnapshotManager(f"sqlite:///{tmp_path / 'snapshot.db'}")
    manager.init_database()

    yield manager

    manager.close()

"""
SQLAlchemy schema for Library Ledger snapshots.

The ledger itself lives in memory. These tables hold a verbatim copy of it so
the state (and id assignment) survives a restart:

- books, members, borrow_records mirror the three collections
- id_sequences keeps the next id of each collection, since ids are never
  reused even when they outrun the row count
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

# Base class for all snapshot tables
Base = declarative_base()


class BookRow(Base):
    """
    Books table - one row per catalog entry.

    No ``available_copies <= total_copies`` constraint: a shrinking copy
    update followed by returns may legitimately exceed it.
    """

    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(Text, nullable=False)
    author = Column(Text, nullable=False)
    isbn = Column(String(64), nullable=False)
    total_copies = Column(Integer, nullable=False)
    available_copies = Column(Integer, nullable=False)

    borrows = relationship("BorrowRow", back_populates="book")

    __table_args__ = (
        CheckConstraint("total_copies >= 0", name="check_total_copies_non_negative"),
        CheckConstraint("available_copies >= 0", name="check_available_copies_non_negative"),
    )


class MemberRow(Base):
    """Members table - one row per registered member."""

    __tablename__ = "members"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    join_date = Column(DateTime, nullable=False)

    borrows = relationship("BorrowRow", back_populates="member")


class BorrowRow(Base):
    """Borrow records table - outstanding while ``return_date`` is NULL."""

    __tablename__ = "borrow_records"

    id = Column(Integer, primary_key=True, autoincrement=False)
    book_id = Column(Integer, ForeignKey("books.id"), nullable=False)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    borrow_date = Column(DateTime, nullable=False)
    due_date = Column(DateTime, nullable=False)
    return_date = Column(DateTime, nullable=True)

    book = relationship("BookRow", back_populates="borrows")
    member = relationship("MemberRow", back_populates="borrows")

    __table_args__ = (
        Index("idx_borrow_member", "member_id"),
        Index("idx_borrow_book", "book_id"),
        CheckConstraint("due_date >= borrow_date", name="check_due_after_borrow"),
    )


class IdSequenceRow(Base):
    """Next id to hand out, per collection."""

    __tablename__ = "id_sequences"

    name = Column(String(32), primary_key=True)
    next_value = Column(Integer, nullable=False)

    __table_args__ = (CheckConstraint("next_value >= 0", name="check_next_value_non_negative"),)

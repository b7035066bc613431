"""
Borrow record model for the Library Ledger.

A borrow record is created by a successful borrow and moves through exactly
one transition:

    OUTSTANDING (return_date is None) -> RETURNED (return_date set)

``return_date`` is write-once. The record never leaves RETURNED and is never
deleted, so the ledger doubles as the lending history.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BorrowStatus(str, Enum):
    """Lifecycle state of a borrow record."""

    OUTSTANDING = "outstanding"
    RETURNED = "returned"


class BorrowRecord(BaseModel):
    """
    A single loan of one copy of a book to one member.

    ``book_id`` and ``member_id`` were validated when the loan was made;
    books and members are never deleted, so they stay resolvable.
    """

    id: int = Field(
        ...,
        description="Borrow identifier, assigned at creation and never reused",
        ge=0,
    )

    book_id: int = Field(
        ...,
        description="Catalog id of the borrowed book",
        ge=0,
    )

    member_id: int = Field(
        ...,
        description="Id of the borrowing member",
        ge=0,
    )

    borrow_date: datetime = Field(
        ...,
        description="When the copy was lent",
    )

    due_date: datetime = Field(
        ...,
        description="When the copy is due back (borrow date plus the loan period)",
    )

    return_date: datetime | None = Field(
        None,
        description="When the copy came back; None while the loan is outstanding",
    )

    @model_validator(mode="after")
    def validate_dates(self) -> "BorrowRecord":
        """Validate date relationships."""
        if self.due_date < self.borrow_date:
            raise ValueError("Due date cannot be before borrow date")

        if self.return_date is not None and self.return_date < self.borrow_date:
            raise ValueError("Return date cannot be before borrow date")

        return self

    @property
    def status(self) -> BorrowStatus:
        if self.return_date is None:
            return BorrowStatus.OUTSTANDING
        return BorrowStatus.RETURNED

    @property
    def is_outstanding(self) -> bool:
        """True while the copy is still out."""
        return self.return_date is None

    def is_overdue(self, now: datetime) -> bool:
        """Check whether the loan is outstanding and past due at ``now``.

        The caller supplies ``now`` so a whole query can be evaluated
        against a single clock reading.
        """
        return self.return_date is None and self.due_date < now

    def mark_returned(self, when: datetime) -> None:
        """
        Record the return of the copy.

        Args:
            when: Return timestamp

        Raises:
            ValueError: If the record was already returned
        """
        if self.return_date is not None:
            raise ValueError(f"Borrow record {self.id} was already returned")
        self.return_date = when

    model_config = ConfigDict(
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "id": 0,
                "book_id": 0,
                "member_id": 0,
                "borrow_date": "2024-03-01T10:30:00",
                "due_date": "2024-03-15T10:30:00",
                "return_date": None,
            }
        },
    )

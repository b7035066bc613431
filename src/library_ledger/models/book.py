"""
Book model for the Library Ledger.

A book is a catalog entry with a copy count. The catalog assigns ``id`` from a
monotonic counter when the book is registered; ``title``, ``author`` and
``isbn`` are opaque strings (no format checks, no uniqueness).

Copy accounting:
- ``total_copies``: copies owned by the library
- ``available_copies``: copies on the shelf right now

Normally ``total_copies - available_copies`` equals the number of outstanding
loans of the book. Shrinking ``total_copies`` below the number of copies on
loan breaks that equality on purpose (loans are never recalled), and returns
made afterwards can lift ``available_copies`` above ``total_copies``. The
model therefore only enforces that both counters are non-negative.
"""

from pydantic import BaseModel, ConfigDict, Field


class Book(BaseModel):
    """A book in the library catalog."""

    id: int = Field(
        ...,
        description="Catalog identifier, assigned at registration and never reused",
        ge=0,
        examples=[0, 1, 42],
    )

    title: str = Field(
        ...,
        description="The title of the book",
        examples=["Dune", "The Left Hand of Darkness"],
    )

    author: str = Field(
        ...,
        description="Author name as printed on the book",
        examples=["Frank Herbert", "Ursula K. Le Guin"],
    )

    isbn: str = Field(
        ...,
        description="ISBN as supplied by the caller; stored verbatim",
        examples=["978-0441013593", "9780441478125"],
    )

    total_copies: int = Field(
        ...,
        description="Total number of copies owned by the library",
        ge=0,
        examples=[0, 1, 5],
    )

    available_copies: int = Field(
        ...,
        description="Number of copies currently available for borrowing",
        ge=0,
        examples=[0, 1, 5],
    )

    @property
    def is_available(self) -> bool:
        """Check if the book has any copy on the shelf."""
        return self.available_copies > 0

    @property
    def checked_out_copies(self) -> int:
        """Copies implied to be on loan by the counters.

        Can be negative after a shrink followed by returns.
        """
        return self.total_copies - self.available_copies

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 0,
                "title": "Dune",
                "author": "Frank Herbert",
                "isbn": "978-0441013593",
                "total_copies": 2,
                "available_copies": 1,
            }
        }
    )

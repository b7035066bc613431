"""
Catalog tools for the Library Ledger MCP server.

- add_book: register a title with a number of copies
- update_book_copies: revise how many copies the library owns
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..ledger.library import Library
from .responses import error_response, success_response

logger = logging.getLogger(__name__)


class AddBookInput(BaseModel):
    """Input schema for the add_book tool."""

    title: str = Field(..., description="Book title", examples=["Dune"])
    author: str = Field(..., description="Author name", examples=["Frank Herbert"])
    isbn: str = Field(..., description="ISBN, stored verbatim", examples=["978-0441013593"])
    copies: int = Field(
        ...,
        description="Number of copies owned; 0 registers the book as unavailable",
        ge=0,
        examples=[0, 1, 5],
    )


async def add_book_handler(library: Library, arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the add_book tool."""
    try:
        try:
            params = AddBookInput.model_validate(arguments)
        except ValidationError as e:
            logger.warning("Invalid add_book parameters: %s", e)
            return error_response(f"Invalid book parameters: {e}")

        book_id = library.add_book(params.title, params.author, params.isbn, params.copies)
        book = library.get_book(book_id)

        return success_response(
            f"Added '{params.title}' as book {book_id} with {params.copies} copies.",
            {"book": book.model_dump(mode="json")},
        )

    except Exception as e:
        logger.exception("Unexpected error in add_book tool")
        return error_response(f"An unexpected error occurred: {e!s}")


class UpdateBookCopiesInput(BaseModel):
    """Input schema for the update_book_copies tool."""

    book_id: int = Field(..., description="Catalog id of the book", ge=0)
    new_total: int = Field(
        ...,
        description="New number of copies owned by the library",
        ge=0,
        examples=[0, 3],
    )


async def update_book_copies_handler(
    library: Library, arguments: dict[str, Any]
) -> dict[str, Any]:
    """
    Handler for the update_book_copies tool.

    Shrinking below the number of copies on loan is allowed; availability
    stops at zero and the loans stay outstanding.
    """
    try:
        try:
            params = UpdateBookCopiesInput.model_validate(arguments)
        except ValidationError as e:
            logger.warning("Invalid update_book_copies parameters: %s", e)
            return error_response(f"Invalid copy update parameters: {e}")

        if not library.update_book_copies(params.book_id, params.new_total):
            return error_response(f"Book {params.book_id} not found")

        book = library.get_book(params.book_id)
        return success_response(
            (
                f"Book {book.id} now has {book.total_copies} copies, "
                f"{book.available_copies} available."
            ),
            {"book": book.model_dump(mode="json")},
        )

    except Exception as e:
        logger.exception("Unexpected error in update_book_copies tool")
        return error_response(f"An unexpected error occurred: {e!s}")


def build_catalog_tools(library: Library) -> list[dict[str, Any]]:
    """Tool definitions bound to ``library``."""

    async def add_book(arguments: dict[str, Any]) -> dict[str, Any]:
        return await add_book_handler(library, arguments)

    async def update_book_copies(arguments: dict[str, Any]) -> dict[str, Any]:
        return await update_book_copies_handler(library, arguments)

    return [
        {
            "name": "add_book",
            "description": (
                "Register a book in the catalog. All copies start available. "
                "Returns the new book id."
            ),
            "inputSchema": AddBookInput.model_json_schema(),
            "handler": add_book,
        },
        {
            "name": "update_book_copies",
            "description": (
                "Change the number of copies the library owns. Extra copies become "
                "available at once; removed copies come out of the available pool and "
                "loans are never recalled."
            ),
            "inputSchema": UpdateBookCopiesInput.model_json_schema(),
            "handler": update_book_copies,
        },
    ]

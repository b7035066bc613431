"""Book Resources - Catalog Access

Resources:
- library://books/list - every catalog entry with its copy counters
- library://books/{book_id} - one book by id
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError

from ..ledger.library import Library
from .uri_utils import parse_id_parameter

logger = logging.getLogger(__name__)


async def list_books_handler(library: Library) -> dict[str, Any]:
    """Returns the whole catalog in registration order."""
    books = library.catalog.list_books()
    logger.debug("MCP Resource Request - books/list: %d books", len(books))
    return {
        "books": [book.model_dump(mode="json") for book in books],
        "total": len(books),
    }


async def get_book_handler(library: Library, book_id: str) -> dict[str, Any]:
    """Returns one book, or raises ResourceError if the id is unknown."""
    logger.debug("MCP Resource Request - books/%s", book_id)

    book = library.get_book(parse_id_parameter(book_id, "book_id"))
    if book is None:
        raise ResourceError(f"Book not found: {book_id}")

    return book.model_dump(mode="json")


def build_book_resources(library: Library) -> list[dict[str, Any]]:
    """Resource definitions bound to ``library``."""

    async def list_books() -> dict[str, Any]:
        return await list_books_handler(library)

    async def get_book(book_id: str) -> dict[str, Any]:
        return await get_book_handler(library, book_id)

    return [
        {
            "uri": "library://books/list",
            "name": "Book Catalog",
            "description": "All books in the catalog with total and available copies",
            "mime_type": "application/json",
            "handler": list_books,
        },
        {
            "uri_template": "library://books/{book_id}",
            "name": "Book Details",
            "description": "A single book by catalog id",
            "mime_type": "application/json",
            "handler": get_book,
        },
    ]

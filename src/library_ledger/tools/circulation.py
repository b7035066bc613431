"""
Circulation tools for the Library Ledger MCP server.

- borrow_book: lend one copy of a book to a member
- return_book: take a lent copy back

Both tools validate their arguments with Pydantic, call the raising ledger
operations (``lend`` / ``reclaim``) so the caller learns why a request was
rejected, and turn every failure into an ``isError`` response. Rejections
(unknown ids, no copies, double return) leave the ledger unchanged, so the
caller may simply retry with different arguments.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..ledger.errors import NotFoundError, PreconditionFailedError
from ..ledger.library import Library
from .responses import error_response, success_response

logger = logging.getLogger(__name__)


# =============================================================================
# BORROW TOOL
# =============================================================================


class BorrowBookInput(BaseModel):
    """Input schema for the borrow_book tool."""

    book_id: int = Field(
        ...,
        description="Catalog id of the book to borrow",
        ge=0,
        examples=[0, 12],
    )

    member_id: int = Field(
        ...,
        description="Id of the member borrowing the book",
        ge=0,
        examples=[0, 3],
    )


async def borrow_book_handler(library: Library, arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the borrow_book tool.

    Args:
        library: Ledger the tool operates on
        arguments: Raw arguments from the tools/call request

    Returns:
        Success response with the new borrow record, or an error response
    """
    try:
        try:
            params = BorrowBookInput.model_validate(arguments)
        except ValidationError as e:
            logger.warning("Invalid borrow parameters: %s", e)
            return error_response(f"Invalid borrow parameters: {e}")

        try:
            record = library.ledger.lend(params.book_id, params.member_id)
        except NotFoundError as e:
            logger.info("Borrow failed - entity not found: %s", e)
            return error_response(str(e))
        except PreconditionFailedError as e:
            logger.info("Borrow failed - precondition: %s", e)
            return error_response(str(e))

        book = library.get_book(record.book_id)
        message = (
            f"Lent book {record.book_id} to member {record.member_id} "
            f"as borrow {record.id}. Due date: {record.due_date.strftime('%B %d, %Y')}"
        )

        return success_response(
            message,
            {
                "borrow": record.model_dump(mode="json"),
                "available_copies": book.available_copies if book else None,
            },
        )

    except Exception as e:
        logger.exception("Unexpected error in borrow_book tool")
        return error_response(f"An unexpected error occurred: {e!s}")


# =============================================================================
# RETURN TOOL
# =============================================================================


class ReturnBookInput(BaseModel):
    """Input schema for the return_book tool."""

    borrow_id: int = Field(
        ...,
        description="Id of the borrow record to close",
        ge=0,
        examples=[0, 41],
    )


async def return_book_handler(library: Library, arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the return_book tool.

    A second return of the same borrow id is rejected without changing the
    book's availability.
    """
    try:
        try:
            params = ReturnBookInput.model_validate(arguments)
        except ValidationError as e:
            logger.warning("Invalid return parameters: %s", e)
            return error_response(f"Invalid return parameters: {e}")

        try:
            record = library.ledger.reclaim(params.borrow_id)
        except NotFoundError as e:
            logger.info("Return failed - borrow record not found: %s", e)
            return error_response(str(e))
        except PreconditionFailedError as e:
            logger.info("Return failed - precondition: %s", e)
            return error_response(str(e))

        message = f"Returned borrow {record.id} (book {record.book_id})."
        if record.return_date > record.due_date:
            message += f" It was due on {record.due_date.strftime('%B %d, %Y')}."
        else:
            message += " Returned on time."

        return success_response(message, {"borrow": record.model_dump(mode="json")})

    except Exception as e:
        logger.exception("Unexpected error in return_book tool")
        return error_response(f"An unexpected error occurred: {e!s}")


# =============================================================================
# TOOL REGISTRATION
# =============================================================================


def build_circulation_tools(library: Library) -> list[dict[str, Any]]:
    """Tool definitions bound to ``library``, ready for server registration."""

    async def borrow_book(arguments: dict[str, Any]) -> dict[str, Any]:
        return await borrow_book_handler(library, arguments)

    async def return_book(arguments: dict[str, Any]) -> dict[str, Any]:
        return await return_book_handler(library, arguments)

    return [
        {
            "name": "borrow_book",
            "description": (
                "Lend one copy of a book to a member. Creates an outstanding borrow record "
                "due after the loan period and decrements the book's available copies. "
                "Fails without side effects if the book or member is unknown or no copy "
                "is available."
            ),
            "inputSchema": BorrowBookInput.model_json_schema(),
            "handler": borrow_book,
        },
        {
            "name": "return_book",
            "description": (
                "Return a borrowed copy. Marks the borrow record returned and makes the "
                "copy available again. A borrow record can only be returned once."
            ),
            "inputSchema": ReturnBookInput.model_json_schema(),
            "handler": return_book,
        },
    ]

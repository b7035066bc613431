"""Member Resources - Membership and Loans

Resources:
- library://members/{member_id} - one member by id
- library://members/{member_id}/loans - book ids the member currently holds
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError

from ..ledger.library import Library
from .uri_utils import parse_id_parameter

logger = logging.getLogger(__name__)


async def get_member_handler(library: Library, member_id: str) -> dict[str, Any]:
    """Returns one member, or raises ResourceError if the id is unknown."""
    logger.debug("MCP Resource Request - members/%s", member_id)

    member = library.get_member(parse_id_parameter(member_id, "member_id"))
    if member is None:
        raise ResourceError(f"Member not found: {member_id}")

    return member.model_dump(mode="json")


async def get_member_loans_handler(library: Library, member_id: str) -> dict[str, Any]:
    """Returns the book ids of the member's outstanding loans.

    Unknown members are not an error here; they simply hold nothing.
    """
    parsed_id = parse_id_parameter(member_id, "member_id")
    book_ids = library.get_books_borrowed_by_member(parsed_id)
    logger.debug("MCP Resource Request - members/%d/loans: %d loans", parsed_id, len(book_ids))

    return {
        "member_id": parsed_id,
        "book_ids": book_ids,
        "count": len(book_ids),
    }


def build_member_resources(library: Library) -> list[dict[str, Any]]:
    """Resource definitions bound to ``library``."""

    async def get_member(member_id: str) -> dict[str, Any]:
        return await get_member_handler(library, member_id)

    async def get_member_loans(member_id: str) -> dict[str, Any]:
        return await get_member_loans_handler(library, member_id)

    return [
        {
            "uri_template": "library://members/{member_id}",
            "name": "Member Details",
            "description": "A single member by id",
            "mime_type": "application/json",
            "handler": get_member,
        },
        {
            "uri_template": "library://members/{member_id}/loans",
            "name": "Member Loans",
            "description": (
                "Book ids currently borrowed by a member, in borrowing order. "
                "A book appears once per outstanding loan."
            ),
            "mime_type": "application/json",
            "handler": get_member_loans,
        },
    ]

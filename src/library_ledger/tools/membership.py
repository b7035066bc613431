"""Membership tools for the Library Ledger MCP server."""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..ledger.library import Library
from .responses import error_response, success_response

logger = logging.getLogger(__name__)


class AddMemberInput(BaseModel):
    """Input schema for the add_member tool."""

    name: str = Field(..., description="Full name of the member", examples=["Alice Smith"])
    email: str = Field(..., description="Contact email, stored verbatim", examples=["a@x.com"])


async def add_member_handler(library: Library, arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the add_member tool."""
    try:
        try:
            params = AddMemberInput.model_validate(arguments)
        except ValidationError as e:
            logger.warning("Invalid add_member parameters: %s", e)
            return error_response(f"Invalid member parameters: {e}")

        member_id = library.add_member(params.name, params.email)
        member = library.get_member(member_id)

        return success_response(
            f"Registered {params.name} as member {member_id}.",
            {"member": member.model_dump(mode="json")},
        )

    except Exception as e:
        logger.exception("Unexpected error in add_member tool")
        return error_response(f"An unexpected error occurred: {e!s}")


def build_membership_tools(library: Library) -> list[dict[str, Any]]:
    """Tool definitions bound to ``library``."""

    async def add_member(arguments: dict[str, Any]) -> dict[str, Any]:
        return await add_member_handler(library, arguments)

    return [
        {
            "name": "add_member",
            "description": "Register a library member. Returns the new member id.",
            "inputSchema": AddMemberInput.model_json_schema(),
            "handler": add_member,
        },
    ]

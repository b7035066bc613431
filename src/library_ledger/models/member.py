"""
Member model for the Library Ledger.

Members are registered once and never change afterwards, so the model is
frozen. ``join_date`` is the ledger clock reading at registration time.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Member(BaseModel):
    """A library member who can borrow books."""

    id: int = Field(
        ...,
        description="Membership identifier, assigned at registration and never reused",
        ge=0,
        examples=[0, 7],
    )

    name: str = Field(
        ...,
        description="Full name of the member",
        examples=["Alice Smith", "Bob Jones"],
    )

    email: str = Field(
        ...,
        description="Contact email; stored verbatim",
        examples=["alice@example.com"],
    )

    join_date: datetime = Field(
        ...,
        description="When the member was registered",
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": 0,
                "name": "Alice Smith",
                "email": "alice@example.com",
                "join_date": "2024-03-01T10:30:00",
            }
        },
    )

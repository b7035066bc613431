"""
Membership repository for the Library Ledger.

Members are appended once and never modified or removed.
"""

import logging

from ..models import Member
from .errors import NotFoundError
from .state import LedgerState

logger = logging.getLogger(__name__)


class MembershipRepository:
    """Append-only store of members, identified by sequential id."""

    def __init__(self, state: LedgerState):
        self.state = state

    def add_member(self, name: str, email: str) -> int:
        """Register a member, stamping ``join_date`` with the ledger clock."""
        with self.state.transaction():
            member_id = self.state.member_ids.allocate()
            self.state.members[member_id] = Member(
                id=member_id,
                name=name,
                email=email,
                join_date=self.state.now(),
            )

        logger.debug("Added member %d '%s'", member_id, name)
        return member_id

    def get_member(self, member_id: int) -> Member | None:
        # Members are frozen, so the stored instance can be shared.
        with self.state.transaction():
            return self.state.members.get(member_id)

    def require_member(self, member_id: int) -> Member:
        """
        Raises:
            NotFoundError: If the id is unknown
        """
        member = self.state.members.get(member_id)
        if member is None:
            raise NotFoundError(f"Member {member_id} not found")
        return member

    def list_members(self) -> list[Member]:
        with self.state.transaction():
            return list(self.state.members.values())

    def count(self) -> int:
        with self.state.transaction():
            return len(self.state.members)

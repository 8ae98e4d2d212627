from typing import Iterator, List, Optional

from core.errors import DuplicateIdError, MemberNotFoundError
from models.member import Member


class MemberRegistry:
    """
    In-memory collection of members, kept in insertion order.
    Member IDs are unique within one registry.
    """

    def __init__(self, members=None):
        self._members: List[Member] = []
        for m in members or []:
            self.add(m)

    def add(self, member: Member) -> None:
        """
        Appends a member.

        Raises:
            DuplicateIdError: If a member with the same ID is already present.
                The registry is left unchanged.
        """
        if self.find(member.id) is not None:
            raise DuplicateIdError(member.id)
        self._members.append(member)

    def find(self, member_id: str) -> Optional[Member]:
        """Returns the member with this ID, or None."""
        clean_id = str(member_id).strip()
        for m in self._members:
            if m.id == clean_id:
                return m
        return None

    def get(self, member_id: str) -> Member:
        """Like find(), but raises MemberNotFoundError instead of returning None."""
        member = self.find(member_id)
        if member is None:
            raise MemberNotFoundError(str(member_id).strip())
        return member

    def remove(self, member_id: str) -> bool:
        """Deletes the member if present. Returns False when there was nothing to remove."""
        member = self.find(member_id)
        if member is None:
            return False
        self._members = [m for m in self._members if m is not member]
        return True

    def list(self) -> List[Member]:
        """A fresh list of all members in insertion order."""
        return list(self._members)

    def clear(self) -> None:
        self._members.clear()

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Member]:
        return iter(self.list())

    def __contains__(self, member_id) -> bool:
        return self.find(member_id) is not None

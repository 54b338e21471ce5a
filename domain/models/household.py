from typing import List, Optional

from pydantic import Field

from domain.models.document import Document, UTCDateTime


class Household(Document):
    """A group of darents sharing care of a set of pets."""

    name: str
    owner_uid: str
    member_uids: List[str] = Field(default_factory=list)
    pet_ids: List[str] = Field(default_factory=list)
    created_at: Optional[UTCDateTime] = None

    def is_member(self, uid: str) -> bool:
        return uid in self.member_uids

    def is_owner(self, uid: str) -> bool:
        return self.owner_uid == uid

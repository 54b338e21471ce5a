"""
Pet Repository - Data access layer for pet profiles
"""

from typing import Iterable, List

from pymongo.database import Database

from adapters.mongo_adapter import Collection
from repositories.base import BaseRepository
from domain.models import PetProfile


class PetRepository(BaseRepository[PetProfile]):
    """Repository for pet profile data access"""

    def __init__(self, db: Database):
        super().__init__(db, PetProfile, Collection.PETS)

    def find_by_owner(self, uid: str) -> List[PetProfile]:
        """Pets added by the given darent"""
        return self._find({"owner_uid": uid})

    def find_by_households(self, household_ids: Iterable[str]) -> List[PetProfile]:
        """Pets whose household_id is any of the given households"""
        return self._find_in("household_id", household_ids)

    def detach_household(self, household_id: str) -> int:
        """Clear household_id on every pet attached to the household"""
        result = self.collection.update_many(
            {"household_id": household_id}, {"$set": {"household_id": None}}
        )
        return result.modified_count

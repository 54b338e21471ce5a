"""
Activity Repository - Data access layer for logged pet activities
"""

from typing import Iterable, List

from pymongo import DESCENDING
from pymongo.database import Database

from adapters.mongo_adapter import Collection
from repositories.base import BaseRepository
from domain.models import PetActivity


class ActivityRepository(BaseRepository[PetActivity]):
    """Repository for pet activity data access"""

    def __init__(self, db: Database):
        super().__init__(db, PetActivity, Collection.ACTIVITIES)

    def find_for_pet(self, pet_id: str) -> List[PetActivity]:
        """Activities of one pet, most recent first"""
        return self._find({"pet_id": pet_id}, sort=[("timestamp", DESCENDING)])

    def find_for_pets(self, pet_ids: Iterable[str]) -> List[PetActivity]:
        """Activities of several pets; ordering across chunks is left to the caller"""
        return self._find_in("pet_id", pet_ids)

    def delete_for_pet(self, pet_id: str) -> int:
        result = self.collection.delete_many({"pet_id": pet_id})
        return result.deleted_count

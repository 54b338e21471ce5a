"""
Household Repository - Data access layer for shared households
"""

from typing import List

from pymongo import DESCENDING
from pymongo.database import Database

from adapters.mongo_adapter import Collection
from repositories.base import BaseRepository
from domain.models import Household


class HouseholdRepository(BaseRepository[Household]):
    """Repository for household data access"""

    def __init__(self, db: Database):
        super().__init__(db, Household, Collection.HOUSEHOLDS)

    def find_for_member(self, uid: str) -> List[Household]:
        """Households the darent belongs to, most recently created first"""
        return self._find({"member_uids": uid}, sort=[("created_at", DESCENDING)])

    def add_member(self, household_id: str, uid: str) -> bool:
        result = self.collection.update_one(
            {"_id": household_id}, {"$addToSet": {"member_uids": uid}}
        )
        return result.matched_count > 0

    def remove_member(self, household_id: str, uid: str) -> bool:
        result = self.collection.update_one(
            {"_id": household_id}, {"$pull": {"member_uids": uid}}
        )
        return result.modified_count > 0

    def add_pet(self, household_id: str, pet_id: str) -> bool:
        result = self.collection.update_one(
            {"_id": household_id}, {"$addToSet": {"pet_ids": pet_id}}
        )
        return result.matched_count > 0

    def remove_pet(self, household_id: str, pet_id: str) -> bool:
        result = self.collection.update_one(
            {"_id": household_id}, {"$pull": {"pet_ids": pet_id}}
        )
        return result.modified_count > 0

    def remove_pet_everywhere(self, pet_id: str) -> int:
        """Drop a pet id from every household listing it"""
        result = self.collection.update_many(
            {"pet_ids": pet_id}, {"$pull": {"pet_ids": pet_id}}
        )
        return result.modified_count

"""
Darent profile and onboarding.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

from pymongo.database import Database

from core.utils.helpers import newest_first
from domain.models import Darent, PetProfile
from domain.schemas.profile_schemas import OnboardingRequest, ProfileUpdate
from repositories import DarentRepository, PetRepository
from services.access import require_user
from services.pet_service import PetService

logger = logging.getLogger("darents.profile")

NOT_AUTHENTICATED = "User not authenticated."


@dataclass
class UserData:
    profile: Optional[Darent] = None
    pets: List[PetProfile] = field(default_factory=list)

    @property
    def has_completed_onboarding(self) -> bool:
        return bool(self.profile and self.profile.name) or bool(self.pets)


class ProfileService:
    @staticmethod
    def get_profile(db: Database, user: Optional[Darent]) -> Darent:
        uid = require_user(user, NOT_AUTHENTICATED)
        return DarentRepository(db).get(uid) or user

    @staticmethod
    def update_profile(db: Database, user: Optional[Darent], changes: ProfileUpdate) -> Darent:
        """Merge the supplied profile fields, creating the profile document if needed."""
        uid = require_user(user, NOT_AUTHENTICATED)
        fields = changes.model_dump(exclude_unset=True)
        if user.email:
            fields.setdefault("email", user.email)
        darent = DarentRepository(db).upsert_profile(uid, fields)
        logger.info("Updated profile of %s", uid)
        return darent

    @staticmethod
    def save_onboarding(
        db: Database, user: Optional[Darent], request: OnboardingRequest
    ) -> Tuple[Darent, List[PetProfile]]:
        """
        Save the profile and create the pets entered during onboarding.

        Pets are created one at a time; a failure stops at that pet and the
        ones already created are kept.
        """
        darent = ProfileService.update_profile(db, user, request.profile)
        pets = [PetService.create_pet(db, darent, p) for p in request.pets]
        logger.info("Onboarding saved for %s with %d pet(s)", darent.id, len(pets))
        return darent, pets

    @staticmethod
    def load_user_data(db: Database, user: Optional[Darent]) -> UserData:
        """Profile and owned pets. A darent without a profile document gets (None, [])."""
        uid = require_user(user, NOT_AUTHENTICATED)
        darent = DarentRepository(db).get(uid)
        if darent is None:
            return UserData()
        pets = newest_first(PetRepository(db).find_by_owner(uid), key=lambda p: p.created_at)
        return UserData(profile=darent, pets=pets)

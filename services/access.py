"""
Access checks shared by the household, pet and activity services.

A darent may see a pet when they own it, when they belong to the household the
pet is attached to, or when they belong to a household that lists the pet.
"""

from typing import Optional

from pymongo.database import Database

from app.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from domain.models import Darent, Household, PetProfile
from repositories import HouseholdRepository, PetRepository

NOT_AUTHENTICATED = "You must be signed in to do that."
HOUSEHOLD_NOT_AUTHENTICATED = "You must be logged in to manage a household."
HOUSEHOLD_NOT_FOUND = "The specified household could not be found."


def require_user(user: Optional[Darent], message: str = NOT_AUTHENTICATED) -> str:
    """Return the signed-in darent's uid or raise UnauthorizedError."""
    if user is None or not user.id:
        raise UnauthorizedError(message, code="NOT_AUTHENTICATED")
    return user.id


def load_household(db: Database, household_id: str) -> Household:
    household = HouseholdRepository(db).get(household_id)
    if household is None:
        raise NotFoundError(HOUSEHOLD_NOT_FOUND, code="HOUSEHOLD_NOT_FOUND")
    return household


def require_member(db: Database, uid: str, household_id: str) -> Household:
    household = load_household(db, household_id)
    if not household.is_member(uid):
        raise ForbiddenError(
            "You are not a member of this household.", code="NOT_A_MEMBER"
        )
    return household


def require_owner(db: Database, uid: str, household_id: str) -> Household:
    household = require_member(db, uid, household_id)
    if not household.is_owner(uid):
        raise ForbiddenError(
            "Only the household owner can do that.", code="NOT_THE_OWNER"
        )
    return household


def can_access_pet(db: Database, uid: str, pet: PetProfile) -> bool:
    if pet.owner_uid == uid:
        return True
    households = HouseholdRepository(db).find_for_member(uid)
    return any(
        h.id == pet.household_id or pet.id in h.pet_ids for h in households
    )


def get_accessible_pet(db: Database, user: Optional[Darent], pet_id: str) -> PetProfile:
    """Load a pet the signed-in darent may see.

    Raises:
        UnauthorizedError: nobody is signed in
        NotFoundError: no such pet
        ForbiddenError: the pet belongs to someone else
    """
    uid = require_user(user)
    pet = PetRepository(db).get(pet_id)
    if pet is None:
        raise NotFoundError(f"Pet not found: {pet_id}", code="PET_NOT_FOUND")
    if not can_access_pet(db, uid, pet):
        raise ForbiddenError("You do not have access to this pet.", code="PET_FORBIDDEN")
    return pet

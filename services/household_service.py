from typing import List, Optional
import logging

from pymongo.database import Database

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.models import Darent, Household, utcnow
from repositories import DarentRepository, HouseholdRepository, PetRepository
from services.access import (
    HOUSEHOLD_NOT_AUTHENTICATED,
    load_household,
    require_member,
    require_owner,
    require_user,
)

logger = logging.getLogger("darents.households")


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ServiceValidationError("Household name must not be empty.", code="INVALID_NAME")
    return name


class HouseholdService:
    @staticmethod
    def create_household(db: Database, user: Optional[Darent], name: str) -> Household:
        """
        Create a household owned by the signed-in darent.

        The creator becomes the owner and sole member, and the household becomes
        their current household.

        Raises:
            UnauthorizedError: if nobody is signed in
            ServiceValidationError: if the name is blank
        """
        uid = require_user(user, HOUSEHOLD_NOT_AUTHENTICATED)
        household = Household(
            name=_clean_name(name),
            owner_uid=uid,
            member_uids=[uid],
            pet_ids=[],
            created_at=utcnow(),
        )
        HouseholdRepository(db).create(household)
        DarentRepository(db).set_household(uid, household.id)
        logger.info("Darent %s created household %s", uid, household.id)
        return household

    @staticmethod
    def list_households(db: Database, user: Optional[Darent]) -> List[Household]:
        uid = require_user(user, HOUSEHOLD_NOT_AUTHENTICATED)
        return HouseholdRepository(db).find_for_member(uid)

    @staticmethod
    def get_household(db: Database, user: Optional[Darent], household_id: str) -> Household:
        uid = require_user(user, HOUSEHOLD_NOT_AUTHENTICATED)
        return require_member(db, uid, household_id)

    @staticmethod
    def join_household(db: Database, user: Optional[Darent], household_id: str) -> Household:
        """
        Add the signed-in darent to an existing household.

        Joining twice is harmless. Raises NotFoundError for an unknown household id.
        """
        uid = require_user(user, HOUSEHOLD_NOT_AUTHENTICATED)
        load_household(db, household_id)

        households = HouseholdRepository(db)
        households.add_member(household_id, uid)
        DarentRepository(db).set_household(uid, household_id)
        logger.info("Darent %s joined household %s", uid, household_id)
        return households.get(household_id)

    @staticmethod
    def leave_household(db: Database, user: Optional[Darent], household_id: str) -> Optional[Household]:
        """
        Remove the signed-in darent from a household.

        The owner may only leave once everyone else is gone; the last member
        leaving deletes the household and detaches its pets.

        Returns:
            The updated household, or None when it was deleted
        """
        uid = require_user(user, HOUSEHOLD_NOT_AUTHENTICATED)
        household = require_member(db, uid, household_id)
        others = [m for m in household.member_uids if m != uid]

        if household.is_owner(uid) and others:
            raise ConflictError(
                "The owner cannot leave while other members remain. Remove them first.",
                code="OWNER_CANNOT_LEAVE",
            )

        households = HouseholdRepository(db)
        darents = DarentRepository(db)
        if user.household_id == household_id:
            darents.set_household(uid, None)

        if not others:
            detached = PetRepository(db).detach_household(household_id)
            households.delete(household_id)
            logger.info(
                "Household %s deleted after last member left (%d pets detached)",
                household_id,
                detached,
            )
            return None

        households.remove_member(household_id, uid)
        logger.info("Darent %s left household %s", uid, household_id)
        return households.get(household_id)

    @staticmethod
    def remove_member(db: Database, user: Optional[Darent], household_id: str, member_uid: str) -> Household:
        """Owner-only: remove another darent from the household."""
        uid = require_user(user, HOUSEHOLD_NOT_AUTHENTICATED)
        household = require_owner(db, uid, household_id)

        if member_uid == household.owner_uid:
            raise ServiceValidationError(
                "The owner cannot be removed from their own household.",
                code="CANNOT_REMOVE_OWNER",
            )
        if not household.is_member(member_uid):
            raise NotFoundError(
                "That darent is not a member of this household.", code="MEMBER_NOT_FOUND"
            )

        households = HouseholdRepository(db)
        households.remove_member(household_id, member_uid)

        darents = DarentRepository(db)
        member = darents.get(member_uid)
        if member is not None and member.household_id == household_id:
            darents.set_household(member_uid, None)

        logger.info("Owner %s removed %s from household %s", uid, member_uid, household_id)
        return households.get(household_id)

    @staticmethod
    def rename_household(db: Database, user: Optional[Darent], household_id: str, name: str) -> Household:
        uid = require_user(user, HOUSEHOLD_NOT_AUTHENTICATED)
        require_owner(db, uid, household_id)
        return HouseholdRepository(db).update_fields(household_id, {"name": _clean_name(name)})

    @staticmethod
    def list_members(db: Database, user: Optional[Darent], household_id: str) -> List[Darent]:
        """Profiles of the household's members in membership order.

        Members without a profile document are returned with only their uid set.
        """
        household = HouseholdService.get_household(db, user, household_id)
        profiles = {d.id: d for d in DarentRepository(db).get_many(household.member_uids)}
        return [profiles.get(uid) or Darent(id=uid) for uid in household.member_uids]

from typing import Any, Dict, List, Optional, Union
import logging

from pymongo.database import Database

from adapters import photo_storage
from adapters.photo_storage import PET_PHOTO_ROOT, PhotoContent, StoredPhoto
from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError, StorageError
from core.utils.helpers import newest_first, unique_by
from domain.models import Darent, PetProfile, utcnow
from domain.schemas.pet_schemas import PetCreate, PetUpdate
from repositories import ActivityRepository, HouseholdRepository, PetRepository
from services.access import get_accessible_pet, require_member, require_user

logger = logging.getLogger("darents.pets")

# Request fields that are not stored on the pet document as-is
_NON_PROFILE_FIELDS = {"photo", "photo_content_type", "remove_photo"}


def _profile_fields(data: Union[PetCreate, PetUpdate]) -> Dict[str, Any]:
    fields = data.model_dump(exclude=_NON_PROFILE_FIELDS)
    if not fields["name"]:
        raise ServiceValidationError("Pet name must not be empty.", code="INVALID_NAME")
    return fields


def _check_photo(data: bytes, content_type: str) -> None:
    if not data:
        raise ServiceValidationError("Photo is empty.", code="INVALID_PHOTO")
    if len(data) > settings.photo_max_bytes:
        raise ServiceValidationError(
            f"Photo exceeds the maximum size of {settings.photo_max_bytes} bytes.",
            code="PHOTO_TOO_LARGE",
        )
    if content_type not in settings.photo_allowed_content_types:
        raise ServiceValidationError(
            f"Unsupported photo type: {content_type}", code="INVALID_PHOTO"
        )


def _upload(db: Database, pet_id: str, data: bytes, content_type: str) -> StoredPhoto:
    _check_photo(data, content_type)
    return photo_storage.upload_pet_photo(db, data, pet_id, content_type)


def _discard_photo(db: Database, path: Optional[str]) -> None:
    """Remove a photo that is no longer referenced; the pet write already succeeded."""
    if not path:
        return
    try:
        photo_storage.delete_photo(db, path)
    except StorageError:
        logger.warning("Orphaned photo left at %s", path, exc_info=True)


class PetService:
    @staticmethod
    def create_pet(db: Database, user: Optional[Darent], data: PetCreate) -> PetProfile:
        """
        Create a pet profile owned by the signed-in darent.

        When a photo is supplied it is uploaded first under the new pet's id and
        an upload failure aborts the creation. A household_id attaches the pet
        to that household, which the darent must belong to.

        Raises:
            UnauthorizedError: if nobody is signed in
            ServiceValidationError: on a blank name or an unacceptable photo
            ForbiddenError / NotFoundError: for a household the darent cannot use
            StorageError: if the photo upload fails
        """
        uid = require_user(user)
        fields = _profile_fields(data)
        if data.household_id:
            require_member(db, uid, data.household_id)

        pets = PetRepository(db)
        pet_id = pets.new_id()

        stored = None
        if data.photo is not None:
            stored = _upload(db, pet_id, data.photo, data.photo_content_type)

        now = utcnow()
        pet = PetProfile(
            id=pet_id,
            owner_uid=uid,
            photo_url=stored.url if stored else None,
            photo_path=stored.path if stored else None,
            created_at=now,
            last_updated_at=now,
            **fields,
        )
        pets.create(pet)
        if pet.household_id:
            HouseholdRepository(db).add_pet(pet.household_id, pet_id)

        logger.info("Darent %s created pet %s", uid, pet_id)
        return pet

    @staticmethod
    def list_pets(db: Database, user: Optional[Darent]) -> List[PetProfile]:
        """
        Every pet the signed-in darent can see, newest first.

        Combines pets they own, pets attached to any of their households, and
        pets listed by those households, without duplicates.
        """
        uid = require_user(user)
        households = HouseholdRepository(db).find_for_member(uid)
        pets = PetRepository(db)

        owned = pets.find_by_owner(uid)
        attached = pets.find_by_households([h.id for h in households])
        listed = pets.get_many([pid for h in households for pid in h.pet_ids])

        merged = unique_by(owned + attached + listed, key=lambda p: p.id)
        return newest_first(merged, key=lambda p: p.created_at)

    @staticmethod
    def list_household_pets(db: Database, user: Optional[Darent], household_id: str) -> List[PetProfile]:
        uid = require_user(user)
        household = require_member(db, uid, household_id)
        pets = PetRepository(db)
        merged = unique_by(
            pets.find_by_households([household_id]) + pets.get_many(household.pet_ids),
            key=lambda p: p.id,
        )
        return newest_first(merged, key=lambda p: p.created_at)

    @staticmethod
    def get_pet(db: Database, user: Optional[Darent], pet_id: str) -> PetProfile:
        return get_accessible_pet(db, user, pet_id)

    @staticmethod
    def update_pet(db: Database, user: Optional[Darent], pet_id: str, data: PetUpdate) -> PetProfile:
        """
        Replace a pet's editable fields.

        A new photo replaces the old one, ``remove_photo`` clears it, otherwise
        the current photo is kept. Moving the pet between households updates
        the households' pet lists.
        """
        uid = require_user(user)
        pet = get_accessible_pet(db, user, pet_id)
        fields = _profile_fields(data)

        new_household = data.household_id
        if new_household and new_household != pet.household_id:
            require_member(db, uid, new_household)

        old_path = pet.photo_path
        if data.photo is not None:
            stored = _upload(db, pet_id, data.photo, data.photo_content_type)
            fields.update(photo_url=stored.url, photo_path=stored.path)
        elif data.remove_photo:
            fields.update(photo_url=None, photo_path=None)
        fields["last_updated_at"] = utcnow()

        updated = PetRepository(db).update_fields(pet_id, fields)

        if new_household != pet.household_id:
            households = HouseholdRepository(db)
            if pet.household_id:
                households.remove_pet(pet.household_id, pet_id)
            if new_household:
                households.add_pet(new_household, pet_id)

        if old_path and updated.photo_path != old_path:
            _discard_photo(db, old_path)

        logger.info("Darent %s updated pet %s", uid, pet_id)
        return updated

    @staticmethod
    def delete_pet(db: Database, user: Optional[Darent], pet_id: str) -> None:
        """Delete a pet together with its activities, household listings and photo."""
        uid = require_user(user)
        pet = get_accessible_pet(db, user, pet_id)

        PetRepository(db).delete(pet_id)
        removed = ActivityRepository(db).delete_for_pet(pet_id)
        HouseholdRepository(db).remove_pet_everywhere(pet_id)
        _discard_photo(db, pet.photo_path)

        logger.info("Darent %s deleted pet %s (%d activities)", uid, pet_id, removed)

    @staticmethod
    def get_photo(db: Database, user: Optional[Darent], pet_id: str) -> PhotoContent:
        pet = get_accessible_pet(db, user, pet_id)
        if not pet.photo_path:
            raise NotFoundError("This pet has no photo.", code="PHOTO_NOT_FOUND")
        return photo_storage.open_photo(db, pet.photo_path)

    @staticmethod
    def get_photo_by_path(db: Database, user: Optional[Darent], path: str) -> PhotoContent:
        """Serve a stored photo by its storage path, checking access to the pet it belongs to."""
        parts = path.strip("/").split("/")
        if len(parts) != 3 or parts[0] != PET_PHOTO_ROOT:
            raise NotFoundError(f"Photo not found: {path}", code="PHOTO_NOT_FOUND")
        get_accessible_pet(db, user, parts[1])
        return photo_storage.open_photo(db, "/".join(parts))

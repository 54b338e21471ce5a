"""Pet profile routes"""

from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from pymongo.database import Database
import logging

from api.dependencies import get_current_user, get_db
from api.responses import ERROR_RESPONSES, StatusResponse
from domain.models import Darent
from domain.schemas.activity_schemas import ActivityResponse, ActivitySummaryResponse
from domain.schemas.pet_schemas import PetCreate, PetResponse, PetUpdate
from services.activity_service import ActivityService
from services.pet_service import PetService

router = APIRouter(prefix="/pets", tags=["Pets"], responses=ERROR_RESPONSES)
logger = logging.getLogger("darents.api.pets")


@router.post("", response_model=PetResponse, status_code=status.HTTP_201_CREATED)
def create_pet(
    payload: PetCreate,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """
    Create a pet profile.

    ``photo`` is optional base64-encoded image data; it is uploaded before the
    profile is saved and an upload failure aborts the request.
    """
    pet = PetService.create_pet(db, user, payload)
    return PetResponse.model_validate(pet)


@router.get("", response_model=List[PetResponse])
def list_pets(user: Darent = Depends(get_current_user), db: Database = Depends(get_db)):
    """All pets the caller owns or shares through a household, newest first"""
    pets = PetService.list_pets(db, user)
    return [PetResponse.model_validate(p) for p in pets]


@router.get("/{pet_id}", response_model=PetResponse)
def get_pet(pet_id: str, user: Darent = Depends(get_current_user), db: Database = Depends(get_db)):
    pet = PetService.get_pet(db, user, pet_id)
    return PetResponse.model_validate(pet)


@router.put("/{pet_id}", response_model=PetResponse)
def update_pet(
    pet_id: str,
    payload: PetUpdate,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    pet = PetService.update_pet(db, user, pet_id, payload)
    return PetResponse.model_validate(pet)


@router.delete("/{pet_id}", response_model=StatusResponse)
def delete_pet(pet_id: str, user: Darent = Depends(get_current_user), db: Database = Depends(get_db)):
    """Delete a pet along with its photo and logged activities"""
    PetService.delete_pet(db, user, pet_id)
    return StatusResponse(status="deleted", id=pet_id)


@router.get("/{pet_id}/photo", response_class=Response)
def get_pet_photo(pet_id: str, user: Darent = Depends(get_current_user), db: Database = Depends(get_db)):
    photo = PetService.get_photo(db, user, pet_id)
    return Response(content=photo.data, media_type=photo.content_type)


@router.get("/{pet_id}/activities", response_model=List[ActivityResponse])
def list_pet_activities(
    pet_id: str,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Activities logged for one pet, most recent first"""
    activities = ActivityService.list_pet_activities(db, user, pet_id)
    return [ActivityResponse.model_validate(a) for a in activities]


@router.get("/{pet_id}/activities/summary", response_model=ActivitySummaryResponse)
def activity_summary(
    pet_id: str,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    return ActivityService.activity_summary(db, user, pet_id)

"""Darent profile and onboarding routes"""

from fastapi import APIRouter, Depends
from pymongo.database import Database
import logging

from api.dependencies import get_current_user, get_db
from api.responses import ERROR_RESPONSES
from domain.models import Darent
from domain.schemas.pet_schemas import PetResponse
from domain.schemas.profile_schemas import (
    DarentResponse,
    OnboardingRequest,
    ProfileUpdate,
    UserDataResponse,
)
from services.profile_service import ProfileService, UserData

router = APIRouter(prefix="/profile", tags=["Profile"], responses=ERROR_RESPONSES)
logger = logging.getLogger("darents.api.profile")


def _user_data_response(data: UserData) -> UserDataResponse:
    return UserDataResponse(
        profile=DarentResponse.model_validate(data.profile) if data.profile else None,
        pets=[PetResponse.model_validate(p) for p in data.pets],
        has_completed_onboarding=data.has_completed_onboarding,
    )


@router.get("", response_model=DarentResponse)
def get_profile(user: Darent = Depends(get_current_user), db: Database = Depends(get_db)):
    return DarentResponse.model_validate(ProfileService.get_profile(db, user))


@router.patch("", response_model=DarentResponse)
def update_profile(
    payload: ProfileUpdate,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Update the caller's profile; omitted fields keep their current values"""
    return DarentResponse.model_validate(ProfileService.update_profile(db, user, payload))


@router.post("/onboarding", response_model=UserDataResponse)
def save_onboarding(
    payload: OnboardingRequest,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Save the onboarding profile together with the first pets"""
    profile, pets = ProfileService.save_onboarding(db, user, payload)
    return _user_data_response(UserData(profile=profile, pets=pets))


@router.get("/data", response_model=UserDataResponse)
def load_user_data(user: Darent = Depends(get_current_user), db: Database = Depends(get_db)):
    """
    Profile plus owned pets, used at app launch to decide whether onboarding
    is still needed. ``profile`` is null for a darent who has none yet.
    """
    return _user_data_response(ProfileService.load_user_data(db, user))

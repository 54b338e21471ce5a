"""Household routes: create, join, leave and manage members"""

from typing import List

from fastapi import APIRouter, Depends, status
from pymongo.database import Database
import logging

from api.dependencies import get_current_user, get_db
from api.responses import ERROR_RESPONSES, StatusResponse
from domain.models import Darent
from domain.schemas.household_schemas import (
    HouseholdCreate,
    HouseholdMemberResponse,
    HouseholdResponse,
    HouseholdUpdate,
)
from domain.schemas.pet_schemas import PetResponse
from services.household_service import HouseholdService
from services.pet_service import PetService

router = APIRouter(prefix="/households", tags=["Households"], responses=ERROR_RESPONSES)
logger = logging.getLogger("darents.api.households")


@router.post("", response_model=HouseholdResponse, status_code=status.HTTP_201_CREATED)
def create_household(
    payload: HouseholdCreate,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Create a household with the caller as owner and sole member"""
    household = HouseholdService.create_household(db, user, payload.name)
    return HouseholdResponse.model_validate(household)


@router.get("", response_model=List[HouseholdResponse])
def list_households(user: Darent = Depends(get_current_user), db: Database = Depends(get_db)):
    households = HouseholdService.list_households(db, user)
    return [HouseholdResponse.model_validate(h) for h in households]


@router.get("/{household_id}", response_model=HouseholdResponse)
def get_household(
    household_id: str,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    household = HouseholdService.get_household(db, user, household_id)
    return HouseholdResponse.model_validate(household)


@router.patch("/{household_id}", response_model=HouseholdResponse)
def rename_household(
    household_id: str,
    payload: HouseholdUpdate,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Rename a household (owner only)"""
    household = HouseholdService.rename_household(db, user, household_id, payload.name)
    return HouseholdResponse.model_validate(household)


@router.post("/{household_id}/join", response_model=HouseholdResponse)
def join_household(
    household_id: str,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Join a household by its id"""
    household = HouseholdService.join_household(db, user, household_id)
    return HouseholdResponse.model_validate(household)


@router.post("/{household_id}/leave", response_model=StatusResponse)
def leave_household(
    household_id: str,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """
    Leave a household.

    Returns status ``deleted`` when the caller was the last member and the
    household was removed.
    """
    remaining = HouseholdService.leave_household(db, user, household_id)
    return StatusResponse(status="left" if remaining else "deleted", id=household_id)


@router.get("/{household_id}/members", response_model=List[HouseholdMemberResponse])
def list_members(
    household_id: str,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    household = HouseholdService.get_household(db, user, household_id)
    members = HouseholdService.list_members(db, user, household_id)
    return [
        HouseholdMemberResponse(
            uid=m.id,
            display_name=m.display_name or m.name,
            email=m.email,
            is_owner=m.id == household.owner_uid,
        )
        for m in members
    ]


@router.delete("/{household_id}/members/{member_uid}", response_model=HouseholdResponse)
def remove_member(
    household_id: str,
    member_uid: str,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Remove another member from the household (owner only)"""
    household = HouseholdService.remove_member(db, user, household_id, member_uid)
    return HouseholdResponse.model_validate(household)


@router.get("/{household_id}/pets", response_model=List[PetResponse])
def list_household_pets(
    household_id: str,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    pets = PetService.list_household_pets(db, user, household_id)
    return [PetResponse.model_validate(p) for p in pets]

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from domain.schemas.pet_schemas import PetCreate, PetResponse


class ProfileUpdate(BaseModel):
    """Darent profile fields; omitted fields are left untouched"""

    display_name: Optional[str] = Field(None, max_length=100)
    name: Optional[str] = Field(None, max_length=100)
    age: Optional[str] = Field(None, max_length=10)
    phone_number: Optional[str] = Field(None, max_length=30)
    home_address: Optional[str] = Field(None, max_length=300)


class DarentResponse(BaseModel):
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    name: Optional[str] = None
    age: Optional[str] = None
    phone_number: Optional[str] = None
    home_address: Optional[str] = None
    household_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class OnboardingRequest(BaseModel):
    profile: ProfileUpdate = Field(default_factory=ProfileUpdate)
    pets: List[PetCreate] = Field(default_factory=list)


class UserDataResponse(BaseModel):
    """Profile plus owned pets; profile is null for a brand-new darent"""

    profile: Optional[DarentResponse] = None
    pets: List[PetResponse] = Field(default_factory=list)
    has_completed_onboarding: bool = False

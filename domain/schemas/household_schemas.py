from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime


class HouseholdCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    def strip_name(cls, v):
        return v.strip()


class HouseholdUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    def strip_name(cls, v):
        return v.strip()


class HouseholdResponse(BaseModel):
    id: str
    name: str
    owner_uid: str
    member_uids: List[str]
    pet_ids: List[str]
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HouseholdMemberResponse(BaseModel):
    uid: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    is_owner: bool = False

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime


class ActivityCreate(BaseModel):
    """Schema for logging a new activity"""

    pet_id: str = Field(..., min_length=1)
    activity_type: str = Field(
        ..., min_length=1, max_length=50, description="e.g. 'Walk', 'Feed', 'Medical'"
    )
    timestamp: Optional[datetime] = Field(
        None, description="When the activity happened; defaults to now"
    )
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("activity_type")
    def strip_type(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("activity_type must not be blank")
        return v


class ActivityUpdate(BaseModel):
    """Partial update of a logged activity"""

    activity_type: Optional[str] = Field(None, min_length=1, max_length=50)
    timestamp: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("activity_type")
    def strip_type(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("activity_type must not be blank")
        return v


class ActivityResponse(BaseModel):
    id: str
    pet_id: str
    darent_id: str
    timestamp: datetime
    activity_type: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ActivityTypeSummary(BaseModel):
    activity_type: str
    count: int
    last_timestamp: datetime


class ActivitySummaryResponse(BaseModel):
    pet_id: str
    total: int
    by_type: List[ActivityTypeSummary]

"""Activity logging routes"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pymongo.database import Database
import logging

from api.dependencies import get_current_user, get_db
from api.responses import ERROR_RESPONSES, StatusResponse
from domain.enums import ActivityType
from domain.models import Darent
from domain.schemas.activity_schemas import ActivityCreate, ActivityResponse, ActivityUpdate
from services.activity_service import ActivityService

router = APIRouter(prefix="/activities", tags=["Activities"], responses=ERROR_RESPONSES)
logger = logging.getLogger("darents.api.activities")


@router.post("", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
def log_activity(
    payload: ActivityCreate,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Log an activity for a pet; ``timestamp`` defaults to now"""
    activity = ActivityService.log_activity(db, user, payload)
    return ActivityResponse.model_validate(activity)


@router.get("", response_model=List[ActivityResponse])
def list_all_activities(
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Return at most this many"),
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Activities across all pets the caller can see, most recent first"""
    activities = ActivityService.list_all_activities(db, user, limit)
    return [ActivityResponse.model_validate(a) for a in activities]


@router.get("/types", response_model=List[str])
def list_activity_types():
    """Suggested activity types; any non-blank type is accepted when logging"""
    return [t.value for t in ActivityType]


@router.get("/{activity_id}", response_model=ActivityResponse)
def get_activity(
    activity_id: str,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    activity = ActivityService.get_activity(db, user, activity_id)
    return ActivityResponse.model_validate(activity)


@router.patch("/{activity_id}", response_model=ActivityResponse)
def update_activity(
    activity_id: str,
    payload: ActivityUpdate,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    activity = ActivityService.update_activity(db, user, activity_id, payload)
    return ActivityResponse.model_validate(activity)


@router.delete("/{activity_id}", response_model=StatusResponse)
def delete_activity(
    activity_id: str,
    user: Darent = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    ActivityService.delete_activity(db, user, activity_id)
    return StatusResponse(status="deleted", id=activity_id)

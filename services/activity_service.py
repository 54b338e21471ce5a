from typing import Dict, List, Optional
import logging

from pymongo.database import Database

from app.exceptions import NotFoundError
from core.utils.helpers import newest_first
from domain.models import Darent, PetActivity, utcnow
from domain.schemas.activity_schemas import (
    ActivityCreate,
    ActivitySummaryResponse,
    ActivityTypeSummary,
    ActivityUpdate,
)
from repositories import ActivityRepository
from services.access import get_accessible_pet, require_user
from services.pet_service import PetService

logger = logging.getLogger("darents.activities")


class ActivityService:
    @staticmethod
    def log_activity(db: Database, user: Optional[Darent], data: ActivityCreate) -> PetActivity:
        """
        Record an activity for a pet the signed-in darent can access.

        The timestamp defaults to now when the caller does not supply one.
        """
        uid = require_user(user)
        get_accessible_pet(db, user, data.pet_id)

        now = utcnow()
        activity = PetActivity(
            pet_id=data.pet_id,
            darent_id=uid,
            timestamp=data.timestamp or now,
            activity_type=data.activity_type,
            notes=data.notes,
            created_at=now,
        )
        ActivityRepository(db).create(activity)
        logger.info("Darent %s logged %s for pet %s", uid, activity.activity_type, data.pet_id)
        return activity

    @staticmethod
    def list_pet_activities(db: Database, user: Optional[Darent], pet_id: str) -> List[PetActivity]:
        get_accessible_pet(db, user, pet_id)
        return ActivityRepository(db).find_for_pet(pet_id)

    @staticmethod
    def list_all_activities(db: Database, user: Optional[Darent], limit: Optional[int] = None) -> List[PetActivity]:
        """
        Activities across every pet the darent can see, most recent first.

        Pet ids are queried in chunks, so the merged result is sorted here
        rather than by the database.
        """
        pets = PetService.list_pets(db, user)
        if not pets:
            return []
        activities = ActivityRepository(db).find_for_pets([p.id for p in pets])
        ordered = newest_first(activities, key=lambda a: a.timestamp)
        if limit:
            return ordered[:limit]
        return ordered

    @staticmethod
    def get_activity(db: Database, user: Optional[Darent], activity_id: str) -> PetActivity:
        require_user(user)
        activity = ActivityRepository(db).get(activity_id)
        if activity is None:
            raise NotFoundError(f"Activity not found: {activity_id}", code="ACTIVITY_NOT_FOUND")
        get_accessible_pet(db, user, activity.pet_id)
        return activity

    @staticmethod
    def update_activity(
        db: Database, user: Optional[Darent], activity_id: str, changes: ActivityUpdate
    ) -> PetActivity:
        """Apply the supplied fields. Notes may be cleared with an explicit null."""
        activity = ActivityService.get_activity(db, user, activity_id)
        fields = changes.model_dump(exclude_unset=True)
        for key in ("activity_type", "timestamp"):
            if key in fields and fields[key] is None:
                del fields[key]
        if not fields:
            return activity
        return ActivityRepository(db).update_fields(activity_id, fields)

    @staticmethod
    def delete_activity(db: Database, user: Optional[Darent], activity_id: str) -> None:
        ActivityService.get_activity(db, user, activity_id)
        ActivityRepository(db).delete(activity_id)
        logger.info("Deleted activity %s", activity_id)

    @staticmethod
    def activity_summary(db: Database, user: Optional[Darent], pet_id: str) -> ActivitySummaryResponse:
        """Count a pet's activities per type, most frequent type first."""
        activities = ActivityService.list_pet_activities(db, user, pet_id)

        by_type: Dict[str, ActivityTypeSummary] = {}
        for a in activities:
            entry = by_type.get(a.activity_type)
            if entry is None:
                by_type[a.activity_type] = ActivityTypeSummary(
                    activity_type=a.activity_type, count=1, last_timestamp=a.timestamp
                )
                continue
            entry.count += 1
            if a.timestamp > entry.last_timestamp:
                entry.last_timestamp = a.timestamp

        ordered = sorted(by_type.values(), key=lambda s: (-s.count, s.activity_type))
        return ActivitySummaryResponse(pet_id=pet_id, total=len(activities), by_type=ordered)

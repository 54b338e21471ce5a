"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository, new_document_id
from repositories.user_repository import (
    DarentRepository,
    AccountRepository,
    RevokedTokenRepository,
)
from repositories.household_repository import HouseholdRepository
from repositories.pet_repository import PetRepository
from repositories.activity_repository import ActivityRepository

__all__ = [
    "BaseRepository",
    "new_document_id",
    "DarentRepository",
    "AccountRepository",
    "RevokedTokenRepository",
    "HouseholdRepository",
    "PetRepository",
    "ActivityRepository",
]

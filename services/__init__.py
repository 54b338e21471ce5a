"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.household_service import HouseholdService
from services.pet_service import PetService
from services.activity_service import ActivityService
from services.profile_service import ProfileService

__all__ = [
    "AuthService",
    "HouseholdService",
    "PetService",
    "ActivityService",
    "ProfileService",
]

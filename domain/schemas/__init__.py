"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.auth_schemas import (
    SignUpRequest,
    SignInRequest,
    GoogleSignInRequest,
    AppleNonceResponse,
    AppleSignInRequest,
    AuthSessionResponse,
)
from domain.schemas.household_schemas import (
    HouseholdCreate,
    HouseholdUpdate,
    HouseholdResponse,
    HouseholdMemberResponse,
)
from domain.schemas.pet_schemas import (
    PetFields,
    PetCreate,
    PetUpdate,
    PetResponse,
)
from domain.schemas.activity_schemas import (
    ActivityCreate,
    ActivityUpdate,
    ActivityResponse,
    ActivityTypeSummary,
    ActivitySummaryResponse,
)
from domain.schemas.profile_schemas import (
    ProfileUpdate,
    DarentResponse,
    OnboardingRequest,
    UserDataResponse,
)

__all__ = [
    # Auth schemas
    "SignUpRequest",
    "SignInRequest",
    "GoogleSignInRequest",
    "AppleNonceResponse",
    "AppleSignInRequest",
    "AuthSessionResponse",
    # Household schemas
    "HouseholdCreate",
    "HouseholdUpdate",
    "HouseholdResponse",
    "HouseholdMemberResponse",
    # Pet schemas
    "PetFields",
    "PetCreate",
    "PetUpdate",
    "PetResponse",
    # Activity schemas
    "ActivityCreate",
    "ActivityUpdate",
    "ActivityResponse",
    "ActivityTypeSummary",
    "ActivitySummaryResponse",
    # Profile schemas
    "ProfileUpdate",
    "DarentResponse",
    "OnboardingRequest",
    "UserDataResponse",
]

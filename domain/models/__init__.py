"""
Domain models package - MongoDB document models.
"""

from domain.models.document import Document, UTCDateTime, ensure_utc, utcnow
from domain.models.user import Darent, Account, RevokedToken
from domain.models.household import Household
from domain.models.pet import PetProfile
from domain.models.activity import PetActivity

__all__ = [
    # Base
    "Document",
    "UTCDateTime",
    "ensure_utc",
    "utcnow",
    # Darent models
    "Darent",
    "Account",
    "RevokedToken",
    # Household models
    "Household",
    # Pet models
    "PetProfile",
    "PetActivity",
]

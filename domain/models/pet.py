"""
Pet profile document.
"""

from typing import Optional

from domain.models.document import Document, UTCDateTime


class PetProfile(Document):
    """A pet, owned by the darent who added it and optionally shared via a household."""

    name: str
    nickname: Optional[str] = None
    breed: Optional[str] = None
    date_of_birth: Optional[UTCDateTime] = None
    gotcha_day: Optional[UTCDateTime] = None
    weight: Optional[str] = None
    favorite_toy: Optional[str] = None
    favorite_snack: Optional[str] = None
    favorite_game: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    preferences: Optional[str] = None

    # Download URL and storage path of the photo, if any
    photo_url: Optional[str] = None
    photo_path: Optional[str] = None

    owner_uid: str
    household_id: Optional[str] = None

    created_at: Optional[UTCDateTime] = None
    last_updated_at: Optional[UTCDateTime] = None

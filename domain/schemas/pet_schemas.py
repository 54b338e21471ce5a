"""
Pet profile request/response schemas.

Photos travel inside the JSON body as base64 and are decoded by Pydantic.
"""

import base64
import binascii
from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, Field, field_validator


def decode_photo(value):
    """Strict base64 decode; any character outside the alphabet is rejected."""
    if isinstance(value, str):
        value = value.encode()
    if not isinstance(value, (bytes, bytearray)):
        raise ValueError("Photo must be a base64 encoded string")
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Photo is not valid base64: {exc}")


PhotoBytes = Annotated[bytes, BeforeValidator(decode_photo)]


class PetFields(BaseModel):
    """Editable pet profile fields"""

    nickname: Optional[str] = Field(None, max_length=100)
    breed: Optional[str] = Field(None, max_length=100)
    date_of_birth: Optional[datetime] = None
    gotcha_day: Optional[datetime] = None
    weight: Optional[str] = Field(None, max_length=50)
    favorite_toy: Optional[str] = None
    favorite_snack: Optional[str] = None
    favorite_game: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=2000)
    location: Optional[str] = None
    preferences: Optional[str] = None
    household_id: Optional[str] = None


class PetCreate(PetFields):
    name: str = Field(..., min_length=1, max_length=100)
    photo: Optional[PhotoBytes] = None
    photo_content_type: str = "image/jpeg"

    @field_validator("name")
    def strip_name(cls, v):
        return v.strip()


class PetUpdate(PetFields):
    """Full replacement of the editable fields; photo is kept unless replaced or removed"""

    name: str = Field(..., min_length=1, max_length=100)
    photo: Optional[PhotoBytes] = None
    photo_content_type: str = "image/jpeg"
    remove_photo: bool = False

    @field_validator("name")
    def strip_name(cls, v):
        return v.strip()


class PetResponse(BaseModel):
    id: str
    name: str
    nickname: Optional[str] = None
    breed: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    gotcha_day: Optional[datetime] = None
    weight: Optional[str] = None
    favorite_toy: Optional[str] = None
    favorite_snack: Optional[str] = None
    favorite_game: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    preferences: Optional[str] = None
    photo_url: Optional[str] = None
    owner_uid: str
    household_id: Optional[str] = None
    created_at: Optional[datetime] = None
    last_updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

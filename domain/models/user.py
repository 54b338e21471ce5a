"""
Darent (caregiver) profile and the authentication records behind it.
"""

from typing import Optional

from pydantic import Field

from domain.models.document import Document, UTCDateTime, utcnow


class Darent(Document):
    """A pet's human caregiver. ``id`` is the authentication uid."""

    email: Optional[str] = None
    display_name: Optional[str] = None
    name: Optional[str] = None
    age: Optional[str] = None
    phone_number: Optional[str] = None
    home_address: Optional[str] = None
    household_id: Optional[str] = None
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None


class Account(Document):
    """Sign-in identities linked to one darent uid."""

    email: Optional[str] = None
    password_hash: Optional[str] = None
    google_sub: Optional[str] = None
    apple_sub: Optional[str] = None
    created_at: UTCDateTime = Field(default_factory=utcnow)


class RevokedToken(Document):
    """A signed-out access token, kept until it would have expired anyway."""

    expires_at: UTCDateTime

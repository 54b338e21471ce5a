from typing import Optional

from pydantic import Field

from domain.models.document import Document, UTCDateTime, utcnow


class PetActivity(Document):
    """A single logged activity (walk, feeding, vet visit, ...) for one pet."""

    pet_id: str
    darent_id: str
    timestamp: UTCDateTime = Field(default_factory=utcnow)
    activity_type: str
    notes: Optional[str] = None
    created_at: Optional[UTCDateTime] = None

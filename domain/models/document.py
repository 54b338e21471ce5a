"""
Base document model shared by every collection.

Documents keep their id in ``_id`` inside MongoDB and expose it as ``id`` in
Python, mirroring how the mobile client saw Firestore document ids.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Mapping, Optional, Type, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict

D = TypeVar("D", bound="Document")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes coming back from the driver as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


class Document(BaseModel):
    """A record stored as one MongoDB document."""

    id: Optional[str] = None

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    @classmethod
    def from_document(cls: Type[D], doc: Optional[Mapping[str, Any]]) -> Optional[D]:
        if doc is None:
            return None
        data = dict(doc)
        raw_id = data.pop("_id", None)
        if raw_id is not None:
            data["id"] = str(raw_id)
        return cls.model_validate(data)

    def to_document(self, include_id: bool = True) -> dict[str, Any]:
        data = self.model_dump(exclude={"id"})
        if include_id and self.id is not None:
            data["_id"] = self.id
        return data

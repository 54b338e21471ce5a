"""Pet photo storage on top of MongoDB GridFS.

Photos live under ``pet_photos/{pet_id}/{uuid}.jpg`` and are served by the
``/photos`` route, so the stored ``photo_url`` is the API prefix plus the
photo URL prefix followed by the storage path.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import uuid

from gridfs.errors import NoFile
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapters import mongo_adapter
from app.config import settings
from app.exceptions import NotFoundError, StorageError

logger = logging.getLogger("darents.storage")

PET_PHOTO_ROOT = "pet_photos"
DEFAULT_CONTENT_TYPE = "image/jpeg"


@dataclass(frozen=True)
class StoredPhoto:
    path: str
    url: str
    content_type: str = DEFAULT_CONTENT_TYPE


@dataclass(frozen=True)
class PhotoContent:
    data: bytes
    content_type: str


def photo_url(path: str) -> str:
    """Public URL of a stored photo, matching where the photos router is mounted."""
    prefix = settings.api_prefix.rstrip("/") + settings.photo_url_prefix.rstrip("/")
    return f"{prefix}/{path}"


def upload_pet_photo(
    db: Database, data: bytes, pet_id: str, content_type: str = DEFAULT_CONTENT_TYPE
) -> StoredPhoto:
    """Store image bytes for a pet and return where they can be downloaded.

    Raises:
        StorageError: if the storage backend rejects the write
    """
    path = f"{PET_PHOTO_ROOT}/{pet_id}/{uuid.uuid4()}.jpg"
    try:
        mongo_adapter.photo_bucket(db).upload_from_stream(
            path,
            data,
            metadata={"content_type": content_type, "pet_id": pet_id},
        )
    except PyMongoError as exc:
        logger.exception("Uploading photo for pet %s failed", pet_id)
        raise StorageError(f"Could not upload photo: {exc}") from exc

    logger.info("Stored photo %s (%d bytes)", path, len(data))
    return StoredPhoto(path=path, url=photo_url(path), content_type=content_type)


def open_photo(db: Database, path: str) -> PhotoContent:
    """Read a stored photo back.

    Raises:
        NotFoundError: if nothing is stored at ``path``
    """
    try:
        stream = mongo_adapter.photo_bucket(db).open_download_stream_by_name(path)
    except NoFile:
        raise NotFoundError(f"Photo not found: {path}")
    except PyMongoError as exc:
        raise StorageError(f"Could not read photo: {exc}") from exc

    metadata = stream.metadata or {}
    return PhotoContent(
        data=stream.read(),
        content_type=metadata.get("content_type", DEFAULT_CONTENT_TYPE),
    )


def delete_photo(db: Database, path: Optional[str]) -> int:
    """Delete every stored revision at ``path``; a missing file is not an error.

    Returns:
        number of files removed
    """
    if not path:
        return 0
    bucket = mongo_adapter.photo_bucket(db)
    removed = 0
    try:
        for grid_out in bucket.find({"filename": path}):
            bucket.delete(grid_out._id)
            removed += 1
    except NoFile:
        pass
    except PyMongoError as exc:
        logger.exception("Deleting photo %s failed", path)
        raise StorageError(f"Could not delete photo: {exc}") from exc

    logger.info("Deleted %d file(s) at %s", removed, path)
    return removed

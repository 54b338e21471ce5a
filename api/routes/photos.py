"""Serve stored pet photos by storage path"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from pymongo.database import Database

from api.dependencies import get_current_user, get_db
from api.responses import ERROR_RESPONSES
from app.config import settings
from domain.models import Darent
from services.pet_service import PetService

router = APIRouter(prefix=settings.photo_url_prefix, tags=["Photos"], responses=ERROR_RESPONSES)


@router.get("/{path:path}", response_class=Response)
def get_photo(path: str, user: Darent = Depends(get_current_user), db: Database = Depends(get_db)):
    """Download a photo by the path embedded in a pet's ``photo_url``"""
    photo = PetService.get_photo_by_path(db, user, path)
    return Response(
        content=photo.data,
        media_type=photo.content_type,
        headers={"Cache-Control": "private, max-age=86400"},
    )

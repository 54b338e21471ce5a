"""
API dependencies for dependency injection
"""

from typing import Generator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database

from adapters import mongo_adapter
from domain.models import Darent
from services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Database, None, None]:
    """
    Database dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Database = Depends(get_db)):
            # Use db here
            pass
    """
    yield mongo_adapter.get_db()


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if credentials is None:
        return None
    return credentials.credentials


def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    db: Database = Depends(get_db),
) -> Darent:
    """Resolve the signed-in darent; responds 401 when the token is missing or invalid."""
    return AuthService.authenticate(db, token)

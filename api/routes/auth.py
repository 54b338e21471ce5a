"""Sign-up, sign-in and sign-out routes"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from pymongo.database import Database
import logging

from api.dependencies import get_bearer_token, get_db
from api.responses import ERROR_RESPONSES, StatusResponse
from app.exceptions import UnauthorizedError
from domain.schemas.auth_schemas import (
    AppleNonceResponse,
    AppleSignInRequest,
    AuthSessionResponse,
    GoogleSignInRequest,
    SignInRequest,
    SignUpRequest,
)
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"], responses=ERROR_RESPONSES)
logger = logging.getLogger("darents.api.auth")


@router.post(
    "/sign-up", response_model=AuthSessionResponse, status_code=status.HTTP_201_CREATED
)
def sign_up(payload: SignUpRequest, db: Database = Depends(get_db)):
    """Create an email/password account and return a session"""
    session = AuthService.sign_up(db, payload.email, payload.password, payload.display_name)
    return AuthSessionResponse.model_validate(session)


@router.post("/sign-in", response_model=AuthSessionResponse)
def sign_in(payload: SignInRequest, db: Database = Depends(get_db)):
    session = AuthService.sign_in(db, payload.email, payload.password)
    return AuthSessionResponse.model_validate(session)


@router.post("/google", response_model=AuthSessionResponse)
def sign_in_with_google(payload: GoogleSignInRequest, db: Database = Depends(get_db)):
    """Exchange a Google ID token for a session"""
    session = AuthService.sign_in_with_google(db, payload.id_token, payload.access_token)
    return AuthSessionResponse.model_validate(session)


@router.post("/apple/nonce", response_model=AppleNonceResponse)
def prepare_apple_sign_in():
    """
    Generate a nonce pair for Sign in with Apple.

    Put ``nonce`` in the Apple authorization request and send ``raw_nonce``
    back to ``/auth/apple`` together with the identity token.
    """
    nonce = AuthService.prepare_apple_sign_in()
    return AppleNonceResponse(
        raw_nonce=nonce.raw_nonce,
        nonce=nonce.nonce,
        requested_scopes=list(nonce.requested_scopes),
    )


@router.post("/apple", response_model=AuthSessionResponse)
def sign_in_with_apple(payload: AppleSignInRequest, db: Database = Depends(get_db)):
    session = AuthService.sign_in_with_apple(
        db, payload.id_token, payload.raw_nonce, payload.full_name
    )
    return AuthSessionResponse.model_validate(session)


@router.post("/sign-out", response_model=StatusResponse)
def sign_out(token: Optional[str] = Depends(get_bearer_token), db: Database = Depends(get_db)):
    """Revoke the bearer token used for this request"""
    if not token:
        raise UnauthorizedError("You must be signed in to do that.", code="NOT_AUTHENTICATED")
    AuthService.sign_out(db, token)
    return StatusResponse(status="signed_out")

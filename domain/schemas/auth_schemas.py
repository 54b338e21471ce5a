from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional
from datetime import datetime


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    display_name: Optional[str] = Field(None, max_length=100)

    @field_validator("email")
    def normalize_email(cls, v):
        return v.lower().strip()


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email")
    def normalize_email(cls, v):
        return v.lower().strip()


class GoogleSignInRequest(BaseModel):
    id_token: str = Field(..., min_length=1)
    access_token: Optional[str] = None


class AppleNonceResponse(BaseModel):
    """Values for an Apple sign-in request.

    ``nonce`` (hashed) goes into the Apple request; ``raw_nonce`` is kept by the
    client and sent back with the identity token.
    """

    raw_nonce: str
    nonce: str
    requested_scopes: List[str] = ["full_name", "email"]


class AppleSignInRequest(BaseModel):
    id_token: str = Field(..., min_length=1)
    raw_nonce: Optional[str] = None
    full_name: Optional[str] = Field(None, max_length=100)


class AuthSessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    uid: str
    email: Optional[str] = None
    provider: str
    is_new_user: bool = False

    model_config = {"from_attributes": True}

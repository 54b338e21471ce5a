"""
Security utilities for password hashing, access tokens and identity-provider
token verification (Google and Apple sign-in).
"""

import hashlib
import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, Optional

import httpx
from jose import JWTError, jwt
from jose.exceptions import JWKError
from passlib.context import CryptContext

from app.config import settings
from app.exceptions import ServiceValidationError, UnauthorizedError
from domain.models import utcnow

logger = logging.getLogger("darents.security")

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

NONCE_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-._"

# Google and Apple both sign identity tokens with RS256
IDENTITY_TOKEN_ALGORITHMS = ["RS256"]


@dataclass(frozen=True)
class AccessToken:
    token: str
    jti: str
    expires_at: datetime


# ============================================================================
# Passwords
# ============================================================================


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be verified")
        return False


# ============================================================================
# Access tokens
# ============================================================================


def create_access_token(
    uid: str,
    email: Optional[str] = None,
    provider: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> AccessToken:
    """Create a signed access token for the darent ``uid``."""
    now = utcnow()
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    jti = uuid.uuid4().hex
    claims: Dict[str, Any] = {
        "sub": uid,
        "jti": jti,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
        "type": "access",
    }
    if email:
        claims["email"] = email
    if provider:
        claims["provider"] = provider

    token = jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    logger.debug("Access token created for user: %s", uid)
    return AccessToken(token=token, jti=jti, expires_at=expire)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Validate an access token and return its claims.

    Raises:
        UnauthorizedError: if the token is malformed, expired or not an access token
    """
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        logger.info("Rejected access token: %s", exc)
        raise UnauthorizedError("Your session is invalid or has expired. Please sign in again.")

    if claims.get("type") != "access" or not claims.get("sub") or not claims.get("jti"):
        raise UnauthorizedError("Your session is invalid or has expired. Please sign in again.")
    return claims


# ============================================================================
# Apple sign-in nonce
# ============================================================================


def random_nonce(length: int = 32) -> str:
    """Random string used to bind an Apple sign-in request to its identity token."""
    if length <= 0:
        raise ValueError("nonce length must be positive")
    return "".join(secrets.choice(NONCE_CHARSET) for _ in range(length))


def sha256_hex(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


# ============================================================================
# Identity provider tokens
# ============================================================================


def fetch_jwks(url: str) -> Dict[str, Any]:
    """Download a provider's JSON Web Key Set."""
    try:
        response = httpx.get(url, timeout=settings.oauth_http_timeout_sec)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPError as exc:
        logger.error("Fetching signing keys from %s failed: %s", url, exc)
        raise UnauthorizedError("Could not verify the sign-in token. Please try again.")


def verify_identity_token(
    id_token: str,
    jwks_url: str,
    audiences: Iterable[str],
    issuers: Iterable[str],
    access_token: Optional[str] = None,
) -> Dict[str, Any]:
    """Verify a provider-signed ID token and return its claims.

    Raises:
        ServiceValidationError: if no audience is configured for the provider
        UnauthorizedError: if the token is malformed, badly signed, expired,
            or issued for another audience or by another issuer
    """
    audiences = [a for a in audiences if a]
    if not audiences:
        raise ServiceValidationError("This sign-in method is not configured.", code="PROVIDER_NOT_CONFIGURED")

    try:
        header = jwt.get_unverified_header(id_token)
    except JWTError:
        raise UnauthorizedError("The supplied auth credential is malformed or has expired.")

    keys = fetch_jwks(jwks_url).get("keys", [])
    key = next((k for k in keys if k.get("kid") == header.get("kid")), None)
    if key is None:
        raise UnauthorizedError("The supplied auth credential is malformed or has expired.")

    try:
        claims = jwt.decode(
            id_token,
            key,
            algorithms=IDENTITY_TOKEN_ALGORITHMS,
            access_token=access_token,
            options={"verify_aud": False, "verify_at_hash": access_token is not None},
        )
    except (JWTError, JWKError) as exc:
        logger.info("Rejected identity token: %s", exc)
        raise UnauthorizedError("The supplied auth credential is malformed or has expired.")

    aud = claims.get("aud")
    token_audiences = aud if isinstance(aud, list) else [aud]
    if not any(a in audiences for a in token_audiences):
        raise UnauthorizedError("The supplied auth credential was issued for another app.")
    if claims.get("iss") not in set(issuers):
        raise UnauthorizedError("The supplied auth credential has an unexpected issuer.")
    if not claims.get("sub"):
        raise UnauthorizedError("The supplied auth credential is malformed or has expired.")
    return claims


def verify_google_id_token(id_token: str, access_token: Optional[str] = None) -> Dict[str, Any]:
    return verify_identity_token(
        id_token,
        settings.google_jwks_url,
        settings.google_client_ids,
        settings.google_issuers,
        access_token=access_token,
    )


def verify_apple_id_token(id_token: str) -> Dict[str, Any]:
    return verify_identity_token(
        id_token,
        settings.apple_jwks_url,
        [settings.apple_client_id],
        [settings.apple_issuer],
    )

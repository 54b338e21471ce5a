"""
Authentication service: email/password, Google and Apple sign-in, sign-out,
and resolving the signed-in darent from an access token.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
import logging

from pymongo.database import Database

from app.config import settings
from app.exceptions import ServiceValidationError, UnauthorizedError
from core import security
from domain.enums import AuthProvider
from domain.models import Account, Darent
from repositories import AccountRepository, DarentRepository, RevokedTokenRepository
from repositories.user_repository import PROVIDER_FIELDS

logger = logging.getLogger("darents.auth")

INVALID_CREDENTIALS = "The email or password is incorrect."
SESSION_EXPIRED = "Your session is invalid or has expired. Please sign in again."


@dataclass
class AuthSession:
    access_token: str
    expires_at: datetime
    uid: str
    email: Optional[str]
    provider: str
    is_new_user: bool = False


@dataclass(frozen=True)
class AppleNonce:
    raw_nonce: str
    nonce: str
    requested_scopes: tuple = ("full_name", "email")


def _is_true(value) -> bool:
    return value is True or value == "true"


class AuthService:
    @staticmethod
    def _issue_session(uid: str, email: Optional[str], provider: AuthProvider, is_new_user: bool = False) -> AuthSession:
        token = security.create_access_token(uid, email=email, provider=provider.value)
        return AuthSession(
            access_token=token.token,
            expires_at=token.expires_at,
            uid=uid,
            email=email,
            provider=provider.value,
            is_new_user=is_new_user,
        )

    # ------------------ Email / password ------------------
    @staticmethod
    def sign_up(db: Database, email: str, password: str, display_name: Optional[str] = None) -> AuthSession:
        """
        Create a password account and its darent profile, then sign in.

        Raises:
            ServiceValidationError: if the password is too short
            ConflictError: if the email is already registered
        """
        if len(password) < settings.password_min_length:
            raise ServiceValidationError(
                f"The password must be {settings.password_min_length} characters long or more.",
                code="WEAK_PASSWORD",
            )
        email = email.strip().lower()

        account = AccountRepository(db).create_account(
            Account(email=email, password_hash=security.hash_password(password))
        )
        DarentRepository(db).upsert_profile(
            account.id, {"email": email, "display_name": display_name}
        )
        logger.info("Created password account %s", account.id)
        return AuthService._issue_session(account.id, email, AuthProvider.PASSWORD, is_new_user=True)

    @staticmethod
    def sign_in(db: Database, email: str, password: str) -> AuthSession:
        """Sign in with email and password; the same error covers unknown email and wrong password."""
        account = AccountRepository(db).get_by_email(email.strip().lower())
        if account is None or not security.verify_password(password, account.password_hash):
            logger.info("Failed password sign-in for %s", email)
            raise UnauthorizedError(INVALID_CREDENTIALS, code="INVALID_CREDENTIALS")
        return AuthService._issue_session(account.id, account.email, AuthProvider.PASSWORD)

    # ------------------ Identity providers ------------------
    @staticmethod
    def _sign_in_with_provider(
        db: Database,
        provider: AuthProvider,
        subject: str,
        email: Optional[str],
        email_verified: bool,
        display_name: Optional[str] = None,
    ) -> AuthSession:
        """Find the account linked to a provider identity, linking or creating one as needed."""
        accounts = AccountRepository(db)
        account = accounts.get_by_provider(provider, subject)
        is_new = False

        if account is None and email and email_verified:
            account = accounts.get_by_email(email)
            if account is not None:
                accounts.link_provider(account.id, provider, subject)
                logger.info("Linked %s identity to account %s", provider.value, account.id)

        if account is None:
            account = accounts.create_account(
                Account(email=email, **{PROVIDER_FIELDS[provider]: subject})
            )
            DarentRepository(db).upsert_profile(
                account.id, {"email": email, "display_name": display_name}
            )
            is_new = True
            logger.info("Created %s account %s", provider.value, account.id)

        return AuthService._issue_session(account.id, account.email, provider, is_new_user=is_new)

    @staticmethod
    def sign_in_with_google(db: Database, id_token: str, access_token: Optional[str] = None) -> AuthSession:
        claims = security.verify_google_id_token(id_token, access_token=access_token)
        return AuthService._sign_in_with_provider(
            db,
            AuthProvider.GOOGLE,
            claims["sub"],
            claims.get("email"),
            _is_true(claims.get("email_verified")),
            display_name=claims.get("name"),
        )

    @staticmethod
    def prepare_apple_sign_in() -> AppleNonce:
        """Generate the nonce pair for an Apple sign-in request.

        The hashed nonce goes into the Apple request; the raw nonce must come back
        with the identity token.
        """
        raw = security.random_nonce()
        return AppleNonce(raw_nonce=raw, nonce=security.sha256_hex(raw))

    @staticmethod
    def sign_in_with_apple(
        db: Database, id_token: str, raw_nonce: Optional[str], full_name: Optional[str] = None
    ) -> AuthSession:
        if not raw_nonce:
            raise ServiceValidationError(
                "A nonce must be generated for Apple Sign-In.", code="MISSING_NONCE"
            )
        claims = security.verify_apple_id_token(id_token)
        if claims.get("nonce") != security.sha256_hex(raw_nonce):
            raise UnauthorizedError(
                "The Apple identity token does not match this sign-in request.",
                code="NONCE_MISMATCH",
            )
        return AuthService._sign_in_with_provider(
            db,
            AuthProvider.APPLE,
            claims["sub"],
            claims.get("email"),
            _is_true(claims.get("email_verified")),
            display_name=full_name,
        )

    # ------------------ Sessions ------------------
    @staticmethod
    def sign_out(db: Database, token: str) -> None:
        claims = security.decode_access_token(token)
        expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
        RevokedTokenRepository(db).revoke(claims["jti"], expires_at)
        logger.info("Signed out user %s", claims["sub"])

    @staticmethod
    def authenticate(db: Database, token: Optional[str]) -> Darent:
        """Resolve the darent behind an access token.

        Raises:
            UnauthorizedError: if the token is missing, invalid, revoked, or its
                account no longer exists
        """
        if not token:
            raise UnauthorizedError("You must be signed in to do that.", code="NOT_AUTHENTICATED")
        claims = security.decode_access_token(token)
        if RevokedTokenRepository(db).is_revoked(claims["jti"]):
            raise UnauthorizedError(SESSION_EXPIRED, code="TOKEN_REVOKED")

        uid = claims["sub"]
        darent = DarentRepository(db).get(uid)
        if darent is not None:
            return darent
        if not AccountRepository(db).exists(uid):
            raise UnauthorizedError(SESSION_EXPIRED, code="ACCOUNT_NOT_FOUND")
        # Account without a profile document yet
        return Darent(id=uid, email=claims.get("email"))

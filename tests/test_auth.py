"""
Authentication tests: password hashing, access tokens, Apple nonces,
identity token verification and the AuthService sign-in flows.

Identity providers are never contacted: signing keys are served from a
monkeypatched ``fetch_jwks`` and tokens are signed locally with a
throwaway RSA key.
"""

import base64
from datetime import timedelta

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwk, jwt

from app.config import settings
from app.exceptions import ConflictError, ServiceValidationError, UnauthorizedError
from core import security
from domain.enums import AuthProvider
from repositories import AccountRepository, DarentRepository
from services.auth_service import AuthService
from test_fixtures import db, make_darent, unique_email

KID = "test-key-1"


def _rsa_private_pem() -> bytes:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )


SIGNING_KEY = _rsa_private_pem()
OTHER_SIGNING_KEY = _rsa_private_pem()
HMAC_SECRET = "provider-signing-secret-for-tests"


def _jwks():
    public = jwk.construct(SIGNING_KEY, "RS256").public_key().to_dict()
    k = base64.urlsafe_b64encode(HMAC_SECRET.encode()).rstrip(b"=").decode()
    return {
        "keys": [
            dict(public, kid=KID, use="sig"),
            {"kty": "oct", "kid": "hmac-key", "alg": "HS256", "k": k},
        ]
    }


def _id_token(claims, kid=KID, key=SIGNING_KEY):
    return jwt.encode(claims, key, algorithm="RS256", headers={"kid": kid})


@pytest.fixture
def provider_keys(monkeypatch):
    monkeypatch.setattr(security, "fetch_jwks", lambda url: _jwks())
    monkeypatch.setattr(settings, "google_client_ids", ["web-client.apps.googleusercontent.com"])
    monkeypatch.setattr(settings, "apple_client_id", "com.darents.app")


def google_claims(**overrides):
    claims = {
        "iss": "https://accounts.google.com",
        "aud": "web-client.apps.googleusercontent.com",
        "sub": "google-sub-1",
        "email": "sarah.martinez@gmail.com",
        "email_verified": True,
        "name": "Sarah Martinez",
        "exp": 4102444800,
        "iat": 1700000000,
    }
    claims.update(overrides)
    return claims


def apple_claims(raw_nonce, **overrides):
    claims = {
        "iss": "https://appleid.apple.com",
        "aud": "com.darents.app",
        "sub": "apple-sub-1",
        "email": "sarah@privaterelay.appleid.com",
        "email_verified": "true",
        "nonce": security.sha256_hex(raw_nonce),
        "exp": 4102444800,
        "iat": 1700000000,
    }
    claims.update(overrides)
    return claims


# =============================================================================
# PASSWORDS, TOKENS & NONCES
# =============================================================================


def test_password_hash_and_verify():
    hashed = security.hash_password("walkies123")
    assert hashed != "walkies123"
    assert security.verify_password("walkies123", hashed)
    assert not security.verify_password("wrong", hashed)
    assert not security.verify_password("walkies123", None)


def test_access_token_round_trip():
    token = security.create_access_token("uid-1", email="sarah@example.com", provider="password")
    claims = security.decode_access_token(token.token)

    assert claims["sub"] == "uid-1"
    assert claims["jti"] == token.jti
    assert claims["email"] == "sarah@example.com"
    assert claims["type"] == "access"


def test_expired_access_token_is_rejected():
    token = security.create_access_token("uid-1", expires_delta=timedelta(seconds=-5))
    with pytest.raises(UnauthorizedError):
        security.decode_access_token(token.token)


def test_tampered_access_token_is_rejected():
    forged = jwt.encode({"sub": "uid-1", "jti": "x", "type": "access"}, "other-secret", algorithm="HS256")
    with pytest.raises(UnauthorizedError):
        security.decode_access_token(forged)
    with pytest.raises(UnauthorizedError):
        security.decode_access_token("not-a-jwt")


def test_random_nonce_length_and_charset():
    nonce = security.random_nonce()
    assert len(nonce) == 32
    assert set(nonce) <= set(security.NONCE_CHARSET)
    assert security.random_nonce() != nonce
    with pytest.raises(ValueError):
        security.random_nonce(0)


def test_sha256_hex_known_value():
    assert security.sha256_hex("abc") == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_prepare_apple_sign_in_returns_hashed_nonce():
    prepared = AuthService.prepare_apple_sign_in()
    assert len(prepared.raw_nonce) == 32
    assert prepared.nonce == security.sha256_hex(prepared.raw_nonce)
    assert list(prepared.requested_scopes) == ["full_name", "email"]


# =============================================================================
# IDENTITY TOKEN VERIFICATION
# =============================================================================


def test_verify_google_id_token(provider_keys):
    claims = security.verify_google_id_token(_id_token(google_claims()))
    assert claims["sub"] == "google-sub-1"


def test_verify_rejects_wrong_audience(provider_keys):
    token = _id_token(google_claims(aud="someone-elses-app"))
    with pytest.raises(UnauthorizedError):
        security.verify_google_id_token(token)


def test_verify_rejects_wrong_issuer(provider_keys):
    token = _id_token(google_claims(iss="https://evil.example.com"))
    with pytest.raises(UnauthorizedError):
        security.verify_google_id_token(token)


def test_verify_rejects_unknown_key_and_bad_signature(provider_keys):
    with pytest.raises(UnauthorizedError):
        security.verify_google_id_token(_id_token(google_claims(), kid="rotated-away"))
    with pytest.raises(UnauthorizedError):
        security.verify_google_id_token(_id_token(google_claims(), key=OTHER_SIGNING_KEY))


def test_verify_only_accepts_rs256(provider_keys):
    forged = jwt.encode(google_claims(), HMAC_SECRET, algorithm="HS256", headers={"kid": "hmac-key"})
    with pytest.raises(UnauthorizedError):
        security.verify_google_id_token(forged)

    wrong_alg = jwt.encode(google_claims(), HMAC_SECRET, algorithm="HS256", headers={"kid": KID})
    with pytest.raises(UnauthorizedError):
        security.verify_google_id_token(wrong_alg)


def test_verify_rejects_malformed_token(provider_keys):
    with pytest.raises(UnauthorizedError):
        security.verify_apple_id_token("invalid_token")


def test_google_not_configured(monkeypatch):
    monkeypatch.setattr(settings, "google_client_ids", [])
    with pytest.raises(ServiceValidationError):
        security.verify_google_id_token(_id_token(google_claims()))


# =============================================================================
# EMAIL / PASSWORD FLOWS
# =============================================================================


def test_sign_up_creates_account_profile_and_session(db):
    email = unique_email("sarah")
    session = AuthService.sign_up(db, email, "walkies123", display_name="Sarah")

    assert session.is_new_user
    assert session.provider == AuthProvider.PASSWORD.value
    assert security.decode_access_token(session.access_token)["sub"] == session.uid

    profile = DarentRepository(db).get(session.uid)
    assert profile.email == email
    assert profile.display_name == "Sarah"
    assert AccountRepository(db).get_by_email(email).password_hash != "walkies123"


def test_sign_up_rejects_short_password(db):
    with pytest.raises(ServiceValidationError) as exc:
        AuthService.sign_up(db, unique_email(), "12345")
    assert exc.value.code == "WEAK_PASSWORD"


def test_sign_up_rejects_email_in_use(db):
    email = unique_email()
    AuthService.sign_up(db, email, "walkies123")
    with pytest.raises(ConflictError):
        AuthService.sign_up(db, email.upper(), "another123")


def test_sign_in_success_and_failures(db):
    email = unique_email()
    created = AuthService.sign_up(db, email, "walkies123")

    session = AuthService.sign_in(db, email, "walkies123")
    assert session.uid == created.uid
    assert not session.is_new_user

    with pytest.raises(UnauthorizedError) as wrong_password:
        AuthService.sign_in(db, email, "wrong-password")
    with pytest.raises(UnauthorizedError) as unknown_email:
        AuthService.sign_in(db, unique_email(), "walkies123")
    assert wrong_password.value.message == unknown_email.value.message


# =============================================================================
# PROVIDER FLOWS
# =============================================================================


def test_google_sign_in_creates_then_reuses_account(db, provider_keys):
    token = _id_token(google_claims())

    first = AuthService.sign_in_with_google(db, token)
    second = AuthService.sign_in_with_google(db, token)

    assert first.is_new_user and not second.is_new_user
    assert first.uid == second.uid
    assert DarentRepository(db).get(first.uid).display_name == "Sarah Martinez"


def test_google_sign_in_links_existing_password_account(db, provider_keys):
    existing = AuthService.sign_up(db, "sarah.martinez@gmail.com", "walkies123")

    session = AuthService.sign_in_with_google(db, _id_token(google_claims()))

    assert session.uid == existing.uid
    assert not session.is_new_user
    assert AccountRepository(db).get(existing.uid).google_sub == "google-sub-1"


def test_google_unverified_email_does_not_take_over_account(db, provider_keys):
    AuthService.sign_up(db, "sarah.martinez@gmail.com", "walkies123")
    token = _id_token(google_claims(email_verified=False))

    with pytest.raises(ConflictError):
        AuthService.sign_in_with_google(db, token)


def test_apple_sign_in_with_matching_nonce(db, provider_keys):
    prepared = AuthService.prepare_apple_sign_in()
    token = _id_token(apple_claims(prepared.raw_nonce))

    session = AuthService.sign_in_with_apple(db, token, prepared.raw_nonce, full_name="Sarah Martinez")

    assert session.is_new_user
    assert session.provider == AuthProvider.APPLE.value
    assert DarentRepository(db).get(session.uid).display_name == "Sarah Martinez"


def test_apple_sign_in_without_nonce_fails(db, provider_keys):
    token = _id_token(apple_claims("whatever"))
    with pytest.raises(ServiceValidationError) as exc:
        AuthService.sign_in_with_apple(db, token, None)
    assert exc.value.code == "MISSING_NONCE"


def test_apple_sign_in_with_invalid_token_fails(db, provider_keys):
    prepared = AuthService.prepare_apple_sign_in()
    with pytest.raises(UnauthorizedError):
        AuthService.sign_in_with_apple(db, "invalid_token", prepared.raw_nonce)


def test_apple_sign_in_nonce_mismatch(db, provider_keys):
    token = _id_token(apple_claims("a-different-raw-nonce"))
    with pytest.raises(UnauthorizedError) as exc:
        AuthService.sign_in_with_apple(db, token, AuthService.prepare_apple_sign_in().raw_nonce)
    assert exc.value.code == "NONCE_MISMATCH"


# =============================================================================
# SESSIONS
# =============================================================================


def test_authenticate_and_sign_out(db):
    session = AuthService.sign_up(db, unique_email(), "walkies123")

    darent = AuthService.authenticate(db, session.access_token)
    assert darent.id == session.uid

    AuthService.sign_out(db, session.access_token)
    with pytest.raises(UnauthorizedError) as exc:
        AuthService.authenticate(db, session.access_token)
    assert exc.value.code == "TOKEN_REVOKED"


def test_authenticate_without_token(db):
    with pytest.raises(UnauthorizedError):
        AuthService.authenticate(db, None)


def test_authenticate_unknown_account(db):
    token = security.create_access_token("ghost-uid").token
    with pytest.raises(UnauthorizedError):
        AuthService.authenticate(db, token)


def test_authenticate_account_without_profile(db):
    session = AuthService.sign_up(db, unique_email(), "walkies123")
    db["users"].delete_one({"_id": session.uid})

    darent = AuthService.authenticate(db, session.access_token)

    assert darent.id == session.uid
    assert darent.email == session.email


def test_authenticate_existing_profile(db):
    sarah = make_darent(db)
    token = security.create_access_token(sarah.id).token
    assert AuthService.authenticate(db, token).name == "Sarah Martinez"

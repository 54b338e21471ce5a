"""
User Repository - Data access layer for darent profiles and sign-in accounts
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from adapters.mongo_adapter import Collection
from app.exceptions import ConflictError
from repositories.base import BaseRepository
from domain.enums import AuthProvider
from domain.models import Account, Darent, RevokedToken, utcnow

PROVIDER_FIELDS = {
    AuthProvider.GOOGLE: "google_sub",
    AuthProvider.APPLE: "apple_sub",
}


class DarentRepository(BaseRepository[Darent]):
    """Repository for darent profile data access"""

    def __init__(self, db: Database):
        super().__init__(db, Darent, Collection.USERS)

    def upsert_profile(self, uid: str, fields: Mapping[str, Any]) -> Darent:
        """Merge profile fields into the darent document, creating it if needed"""
        now = utcnow()
        self.collection.update_one(
            {"_id": uid},
            {
                "$set": {**dict(fields), "updated_at": now},
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )
        return self.get(uid)

    def set_household(self, uid: str, household_id: Optional[str]) -> None:
        self.collection.update_one(
            {"_id": uid},
            {"$set": {"household_id": household_id, "updated_at": utcnow()}},
            upsert=True,
        )


class AccountRepository(BaseRepository[Account]):
    """Repository for sign-in identities"""

    def __init__(self, db: Database):
        super().__init__(db, Account, Collection.ACCOUNTS)

    def get_by_email(self, email: str) -> Optional[Account]:
        return self._to_model(self.collection.find_one({"email": email.lower()}))

    def get_by_provider(self, provider: AuthProvider, subject: str) -> Optional[Account]:
        field = PROVIDER_FIELDS[provider]
        return self._to_model(self.collection.find_one({field: subject}))

    def create_account(self, account: Account) -> Account:
        """Insert an account; a duplicate email raises ConflictError"""
        if account.email:
            account.email = account.email.lower()
            if self.get_by_email(account.email) is not None:
                raise ConflictError(
                    "The email address is already in use by another account.",
                    code="EMAIL_IN_USE",
                )
        try:
            return self.create(account)
        except DuplicateKeyError:
            raise ConflictError(
                "The email address is already in use by another account.",
                code="EMAIL_IN_USE",
            )

    def link_provider(self, uid: str, provider: AuthProvider, subject: str) -> Optional[Account]:
        return self.update_fields(uid, {PROVIDER_FIELDS[provider]: subject})


class RevokedTokenRepository(BaseRepository[RevokedToken]):
    """Repository for signed-out token ids"""

    def __init__(self, db: Database):
        super().__init__(db, RevokedToken, Collection.REVOKED_TOKENS)

    def revoke(self, jti: str, expires_at: datetime) -> None:
        self.collection.update_one(
            {"_id": jti}, {"$set": {"expires_at": expires_at}}, upsert=True
        )

    def is_revoked(self, jti: str) -> bool:
        return self.exists(jti)

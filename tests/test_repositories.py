"""
Repository tests against an in-memory MongoDB (mongomock).

Covers:
- BaseRepository CRUD and id handling
- Chunked $in queries for multi-id lookups
- Household membership and pet list updates
- Account uniqueness and provider linking
- Revoked token bookkeeping
- Index creation
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from adapters import mongo_adapter
from app.config import settings
from app.exceptions import ConflictError
from domain.enums import AuthProvider
from domain.models import Account, PetProfile
from repositories import (
    AccountRepository,
    ActivityRepository,
    DarentRepository,
    HouseholdRepository,
    PetRepository,
    RevokedTokenRepository,
)
from test_fixtures import db, make_activity, make_darent, make_household, make_pet, minutes_ago


# =============================================================================
# BASE REPOSITORY
# =============================================================================


def test_create_assigns_id_and_get_round_trips(db):
    owner = make_darent(db)
    pet = PetRepository(db).create(PetProfile(name="Mochi", owner_uid=owner.id, breed="Shiba Inu"))

    assert pet.id
    stored = db["pets"].find_one({"_id": pet.id})
    assert stored["name"] == "Mochi"
    assert "id" not in stored

    loaded = PetRepository(db).get(pet.id)
    assert loaded.name == "Mochi"
    assert loaded.breed == "Shiba Inu"
    assert loaded.owner_uid == owner.id


def test_get_unknown_id_returns_none(db):
    assert PetRepository(db).get("does-not-exist") is None
    assert not PetRepository(db).exists("does-not-exist")


def test_update_fields_returns_stored_result(db):
    owner = make_darent(db)
    pet = make_pet(db, owner, name="Biscuit")

    updated = PetRepository(db).update_fields(pet.id, {"nickname": "Biscy", "weight": "12 kg"})

    assert updated.nickname == "Biscy"
    assert updated.weight == "12 kg"
    assert updated.name == "Biscuit"


def test_update_requires_id(db):
    with pytest.raises(ValueError):
        PetRepository(db).update(PetProfile(name="Ghost", owner_uid="nobody"))


def test_delete_reports_whether_anything_was_removed(db):
    owner = make_darent(db)
    pet = make_pet(db, owner)
    repo = PetRepository(db)

    assert repo.delete(pet.id) is True
    assert repo.delete(pet.id) is False


def test_get_many_queries_in_chunks(db, monkeypatch):
    """
    Multi-id lookups are split into batches of ``in_query_chunk_size`` ids,
    skipping unknown ids and duplicates.
    """
    monkeypatch.setattr(settings, "in_query_chunk_size", 2)
    owner = make_darent(db)
    pets = [make_pet(db, owner, name=f"Pet {i}") for i in range(5)]
    repo = PetRepository(db)

    seen_queries = []
    real_find = repo.collection.find

    def spy_find(query, *args, **kwargs):
        seen_queries.append(query)
        return real_find(query, *args, **kwargs)

    monkeypatch.setattr(repo.collection, "find", spy_find)

    ids = [p.id for p in pets] + [pets[0].id, "missing"]
    found = repo.get_many(ids)

    assert sorted(p.id for p in found) == sorted(p.id for p in pets)
    assert [len(q["_id"]["$in"]) for q in seen_queries] == [2, 2, 2]


def test_get_many_with_no_ids_skips_the_query(db):
    assert PetRepository(db).get_many([]) == []
    assert PetRepository(db).find_by_households([None, ""]) == []


# =============================================================================
# HOUSEHOLDS
# =============================================================================


def test_find_for_member_newest_first(db):
    sarah = make_darent(db)
    michael = make_darent(db, profile_type="partner")
    older = make_household(db, sarah, name="Cabin", created_at=minutes_ago(60))
    newer = make_household(db, michael, members=[sarah], name="City flat", created_at=minutes_ago(5))
    make_household(db, michael, name="Not Sarah's")

    found = HouseholdRepository(db).find_for_member(sarah.id)

    assert [h.id for h in found] == [newer.id, older.id]


def test_add_member_is_idempotent(db):
    sarah = make_darent(db)
    emma = make_darent(db, profile_type="sitter")
    home = make_household(db, sarah)
    repo = HouseholdRepository(db)

    assert repo.add_member(home.id, emma.id)
    assert repo.add_member(home.id, emma.id)

    assert repo.get(home.id).member_uids == [sarah.id, emma.id]


def test_add_member_to_unknown_household(db):
    assert HouseholdRepository(db).add_member("nope", "someone") is False


def test_remove_pet_everywhere(db):
    sarah = make_darent(db)
    michael = make_darent(db, profile_type="partner")
    first = make_household(db, sarah, pet_ids=["pet-1", "pet-2"])
    second = make_household(db, michael, pet_ids=["pet-1"])
    repo = HouseholdRepository(db)

    assert repo.remove_pet_everywhere("pet-1") == 2
    assert repo.get(first.id).pet_ids == ["pet-2"]
    assert repo.get(second.id).pet_ids == []


# =============================================================================
# PETS & ACTIVITIES
# =============================================================================


def test_find_by_households_and_detach(db):
    sarah = make_darent(db)
    home = make_household(db, sarah)
    shared = make_pet(db, sarah, name="Shared", household_id=home.id)
    make_pet(db, sarah, name="Private")
    repo = PetRepository(db)

    assert [p.id for p in repo.find_by_households([home.id])] == [shared.id]
    assert repo.detach_household(home.id) == 1
    assert repo.get(shared.id).household_id is None


def test_activities_for_pet_most_recent_first(db):
    sarah = make_darent(db)
    pet = make_pet(db, sarah)
    walk = make_activity(db, pet, sarah, "Walk", timestamp=minutes_ago(90))
    feed = make_activity(db, pet, sarah, "Feed", timestamp=minutes_ago(10))
    repo = ActivityRepository(db)

    assert [a.id for a in repo.find_for_pet(pet.id)] == [feed.id, walk.id]
    assert repo.delete_for_pet(pet.id) == 2
    assert repo.find_for_pet(pet.id) == []


# =============================================================================
# DARENTS, ACCOUNTS & TOKENS
# =============================================================================


def test_upsert_profile_keeps_created_at(db):
    repo = DarentRepository(db)
    first = repo.upsert_profile("uid-1", {"name": "Sarah Martinez"})
    second = repo.upsert_profile("uid-1", {"phone_number": "555-0100"})

    assert second.name == "Sarah Martinez"
    assert second.phone_number == "555-0100"
    assert abs(second.created_at - first.created_at) < timedelta(seconds=1)
    assert second.updated_at >= first.updated_at


def test_set_household_creates_missing_profile(db):
    DarentRepository(db).set_household("uid-2", "home-1")
    assert DarentRepository(db).get("uid-2").household_id == "home-1"


def test_create_account_rejects_duplicate_email(db):
    repo = AccountRepository(db)
    repo.create_account(Account(email="Sarah@Example.com", password_hash="x"))

    with pytest.raises(ConflictError) as exc:
        repo.create_account(Account(email="sarah@example.com", password_hash="y"))

    assert exc.value.code == "EMAIL_IN_USE"
    assert repo.get_by_email("SARAH@example.com").password_hash == "x"


def test_provider_lookup_and_link(db):
    repo = AccountRepository(db)
    account = repo.create_account(Account(email="sarah@example.com", password_hash="x"))

    assert repo.get_by_provider(AuthProvider.GOOGLE, "google-123") is None
    repo.link_provider(account.id, AuthProvider.GOOGLE, "google-123")

    assert repo.get_by_provider(AuthProvider.GOOGLE, "google-123").id == account.id
    assert repo.get_by_provider(AuthProvider.APPLE, "google-123") is None


def test_revoked_tokens(db):
    repo = RevokedTokenRepository(db)
    expires = datetime.now(timezone.utc) + timedelta(days=1)

    assert not repo.is_revoked("jti-1")
    repo.revoke("jti-1", expires)
    repo.revoke("jti-1", expires)

    assert repo.is_revoked("jti-1")
    assert db["revoked_tokens"].count_documents({}) == 1


# =============================================================================
# INDEXES
# =============================================================================


def test_ensure_indexes(monkeypatch):
    collections = {name: Mock() for name in mongo_adapter.Collection}
    monkeypatch.setattr(mongo_adapter, "collection", lambda name, db=None: collections[name])

    mongo_adapter.ensure_indexes()

    accounts = collections[mongo_adapter.Collection.ACCOUNTS].create_index
    email_call = accounts.call_args_list[0]
    assert email_call.args == ("email",)
    assert email_call.kwargs["unique"] is True

    revoked = collections[mongo_adapter.Collection.REVOKED_TOKENS].create_index
    revoked.assert_called_once_with("expires_at", expireAfterSeconds=0)
    collections[mongo_adapter.Collection.PETS].create_index.assert_any_call("household_id")
    collections[mongo_adapter.Collection.USERS].create_index.assert_not_called()

"""Tests for the credential store."""

import pytest

from jwtpizza.auth.credentials import CredentialStore
from jwtpizza.core.errors import DuplicateEmail, InvalidCredentials, UnknownUser
from jwtpizza.models.user import Role, UserRole


async def test_create_assigns_id_and_hashes_password(database):
    async with database.session() as db:
        store = CredentialStore(db)
        user = await store.create("pizza diner", "d@jwt.com", "diner", [Role.DINER])

        assert isinstance(user.id, int)
        assert user.password_hash != "diner"
        assert user.role_claims() == [{"role": "diner"}]


async def test_create_rejects_duplicate_email(database):
    async with database.session() as db:
        store = CredentialStore(db)
        first = await store.create("first", "d@jwt.com", "one", [Role.DINER])

        with pytest.raises(DuplicateEmail):
            await store.create("second", "d@jwt.com", "two", [Role.DINER])

        unchanged = await store.get_by_email("d@jwt.com")
        assert unchanged.id == first.id
        assert unchanged.name == "first"
        assert await store.count() == 1


async def test_email_match_is_case_sensitive(database):
    async with database.session() as db:
        store = CredentialStore(db)
        await store.create("lower", "d@jwt.com", "one", [Role.DINER])

        assert await store.email_exists("d@jwt.com")
        assert not await store.email_exists("D@JWT.com")


async def test_create_with_franchise_role(database):
    async with database.session() as db:
        store = CredentialStore(db)
        user = await store.create(
            "franchisee", "f@jwt.com", "franchisee",
            [Role.DINER, UserRole(role=Role.FRANCHISEE, object_id=1)],
        )

        assert user.role_claims() == [
            {"role": "diner"},
            {"role": "franchisee", "objectId": 1},
        ]


async def test_lookup_returns_user_for_correct_password(database):
    async with database.session() as db:
        store = CredentialStore(db)
        created = await store.create("pizza diner", "d@jwt.com", "diner", [Role.DINER])

        found = await store.lookup("d@jwt.com", "diner")
        assert found.id == created.id


async def test_lookup_fails_identically_for_unknown_email_and_wrong_password(database):
    async with database.session() as db:
        store = CredentialStore(db)
        await store.create("pizza diner", "d@jwt.com", "diner", [Role.DINER])

        with pytest.raises(InvalidCredentials) as wrong_password:
            await store.lookup("d@jwt.com", "not-diner")
        with pytest.raises(InvalidCredentials) as unknown_email:
            await store.lookup("nobody@jwt.com", "diner")

        assert wrong_password.value.status_code == unknown_email.value.status_code
        assert wrong_password.value.message == unknown_email.value.message


async def test_update_changes_only_supplied_fields(database):
    async with database.session() as db:
        store = CredentialStore(db)
        user = await store.create("pizza diner", "d@jwt.com", "diner", [Role.DINER])

        updated = await store.update(user.id, email="new@jwt.com")

        assert updated.email == "new@jwt.com"
        assert updated.name == "pizza diner"
        assert (await store.lookup("new@jwt.com", "diner")).id == user.id


async def test_update_rehashes_new_password(database):
    async with database.session() as db:
        store = CredentialStore(db)
        user = await store.create("pizza diner", "d@jwt.com", "diner", [Role.DINER])

        await store.update(user.id, password="new-secret")

        with pytest.raises(InvalidCredentials):
            await store.lookup("d@jwt.com", "diner")
        assert (await store.lookup("d@jwt.com", "new-secret")).id == user.id


async def test_update_rejects_email_of_another_user(database):
    async with database.session() as db:
        store = CredentialStore(db)
        await store.create("a", "a@jwt.com", "a", [Role.DINER])
        b = await store.create("b", "b@jwt.com", "b", [Role.DINER])

        with pytest.raises(DuplicateEmail):
            await store.update(b.id, email="a@jwt.com")


async def test_update_to_own_email_is_allowed(database):
    async with database.session() as db:
        store = CredentialStore(db)
        user = await store.create("a", "a@jwt.com", "a", [Role.DINER])

        updated = await store.update(user.id, email="a@jwt.com")
        assert updated.email == "a@jwt.com"


async def test_update_unknown_user(database):
    async with database.session() as db:
        with pytest.raises(UnknownUser):
            await CredentialStore(db).update(999, email="x@jwt.com")

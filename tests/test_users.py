"""Tests for the user credential store."""

import pytest

from src.exceptions import AlreadyExistsError, NotFoundError, ValidationFailedError
from src.models.user import User, normalize_user_fields
from src.services.users import UserStore


@pytest.fixture
def store(db):
    return UserStore(db)


def test_normalize_user_fields():
    """Names are trimmed, emails trimmed and lowercased."""
    assert normalize_user_fields(name="  Jane ", email=" JANE@X.com ") == {
        "name": "Jane",
        "email": "jane@x.com",
    }
    assert normalize_user_fields() == {}


@pytest.mark.parametrize(
    ("name", "email"),
    [
        ("   ", "jane@example.com"),
        ("Jane", "not-an-email"),
        ("Jane", "   "),
        ("x" * 256, "jane@example.com"),
    ],
)
def test_normalize_user_fields_rejects_invalid(name, email):
    with pytest.raises(ValidationFailedError):
        normalize_user_fields(name=name, email=email)


class TestCreate:
    """Tests for UserStore.create."""

    def test_create_normalizes_fields(self, store):
        user = store.create(" Jane ", "JANE@X.com", "hash")

        assert user.id is not None
        assert user.name == "Jane"
        assert user.email == "jane@x.com"
        assert user.created_at is not None
        assert user.updated_at is not None

    def test_duplicate_email_rejected_by_unique_index(self, store, db):
        """The database constraint decides uniqueness, not a pre-check."""
        store.create("Jane", "jane@example.com", "hash")

        with pytest.raises(AlreadyExistsError):
            store.create("Other Jane", "Jane@Example.com", "hash")

        assert db.query(User).count() == 1

    def test_session_usable_after_duplicate(self, store):
        store.create("Jane", "jane@example.com", "hash")
        with pytest.raises(AlreadyExistsError):
            store.create("Jane", "jane@example.com", "hash")

        user = store.create("John", "john@example.com", "hash")
        assert store.find_by_id(user.id) is not None


class TestFind:
    """Tests for lookups."""

    def test_find_by_email_is_case_insensitive(self, store):
        created = store.create("Jane", "jane@example.com", "hash")
        assert store.find_by_email("  JANE@example.COM ").id == created.id

    def test_find_by_email_missing(self, store):
        assert store.find_by_email("nobody@example.com") is None

    def test_find_by_id_accepts_string_id(self, store):
        created = store.create("Jane", "jane@example.com", "hash")
        assert store.find_by_id(str(created.id)).id == created.id

    def test_find_by_id_missing(self, store):
        assert store.find_by_id(999999) is None
        assert store.find_by_id("not-an-id") is None


class TestUpdate:
    """Tests for UserStore.update_by_id."""

    def test_update_name_and_email(self, store):
        user = store.create("Jane", "jane@example.com", "hash")

        updated = store.update_by_id(user.id, {"name": " Janet ", "email": "JANET@example.com"})

        assert updated.id == user.id
        assert updated.name == "Janet"
        assert updated.email == "janet@example.com"

    def test_update_missing_user(self, store):
        with pytest.raises(NotFoundError):
            store.update_by_id(999999, {"name": "Nobody"})

    def test_update_to_taken_email(self, store):
        store.create("Jane", "jane@example.com", "hash")
        john = store.create("John", "john@example.com", "hash")

        with pytest.raises(AlreadyExistsError):
            store.update_by_id(john.id, {"email": "JANE@example.com"})

        assert store.find_by_id(john.id).email == "john@example.com"

    def test_update_rejects_invalid_fields(self, store):
        user = store.create("Jane", "jane@example.com", "hash")

        with pytest.raises(ValidationFailedError):
            store.update_by_id(user.id, {"name": ""})
        with pytest.raises(ValidationFailedError):
            store.update_by_id(user.id, {"email": "broken"})

    def test_update_rejects_password(self, store):
        """Only name and email are writable through a profile patch."""
        user = store.create("Jane", "jane@example.com", "hash")

        with pytest.raises(ValidationFailedError):
            store.update_by_id(user.id, {"password_hash": "other"})

        assert store.find_by_id(user.id).password_hash == "hash"

    def test_empty_patch_returns_user(self, store):
        user = store.create("Jane", "jane@example.com", "hash")
        assert store.update_by_id(user.id, {}).email == "jane@example.com"

"""Credential store for user records."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.exceptions import AlreadyExistsError, NotFoundError, ValidationFailedError
from src.models.user import User, normalize_email, normalize_user_fields

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "email"})


class UserStore:
    """Persistence operations on the users table.

    Email uniqueness is enforced by the unique index on ``users.email``; an
    insert or update that violates it surfaces as ``AlreadyExistsError``.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        """Get a user by email, ignoring case and surrounding whitespace."""
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: int | str) -> User | None:
        """Get a user by id. Ids that are not integers never resolve."""
        try:
            key = int(user_id)
        except (TypeError, ValueError):
            return None
        return self.db.get(User, key)

    def create(self, name: str, email: str, password_hash: str) -> User:
        """Insert a new user."""
        fields = normalize_user_fields(name=name, email=email)
        user = User(name=fields["name"], email=fields["email"], password_hash=password_hash)
        self.db.add(user)
        self._commit(fields["email"])
        self.db.refresh(user)
        return user

    def update_by_id(self, user_id: int | str, patch: dict[str, Any]) -> User:
        """Apply a partial update of name and/or email."""
        unknown = set(patch) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationFailedError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        user = self.find_by_id(user_id)
        if user is None:
            raise NotFoundError()

        fields = normalize_user_fields(name=patch.get("name"), email=patch.get("email"))
        if not fields:
            return user

        for key, value in fields.items():
            setattr(user, key, value)
        self._commit(fields.get("email"))
        self.db.refresh(user)
        return user

    def _commit(self, email: str | None) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Unique constraint rejected email {email!r}")
            raise AlreadyExistsError() from e

"""Account service for registration, login and profile management."""

import logging

from sqlalchemy.orm import Session

from src.config import Settings
from src.exceptions import (
    AlreadyExistsError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationFailedError,
)
from src.models.user import User, normalize_user_fields
from src.services.passwords import PasswordHasher
from src.services.tokens import TokenService
from src.services.users import UserStore

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72


class AccountService:
    """Orchestrates the credential store, password hasher and token service."""

    def __init__(
        self,
        db: Session,
        settings: Settings,
        hasher: PasswordHasher | None = None,
        tokens: TokenService | None = None,
    ):
        self.users = UserStore(db)
        self.hasher = hasher or PasswordHasher(rounds=settings.bcrypt_rounds)
        self.tokens = tokens or TokenService(settings)

    def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Create an account and return it with a fresh token.

        Field validation and the existence check run before hashing so a doomed
        request does not pay for bcrypt. The unique index still decides
        concurrent registrations.
        """
        if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationFailedError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
            )
        # bcrypt ignores everything past 72 bytes
        if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValidationFailedError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")

        fields = normalize_user_fields(name=name, email=email)
        if self.users.find_by_email(fields["email"]) is not None:
            raise AlreadyExistsError()

        password_hash = self.hasher.hash(password)
        user = self.users.create(fields["name"], fields["email"], password_hash)
        logger.info(f"Registered user {user.id}")

        return user, self.tokens.issue(user.id)

    def login(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials and return the user with a fresh token."""
        user = self.users.find_by_email(email)
        if user is None:
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not self.hasher.verify(password, user.password_hash):
            logger.info(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentialsError()

        return user, self.tokens.issue(user.id)

    def get_profile(self, user_id: int | str) -> User:
        """Get a user by id."""
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError()
        return user

    def update_profile(
        self,
        user_id: int | str,
        name: str | None = None,
        email: str | None = None,
    ) -> User:
        """Update name and/or email. Omitted fields are left unchanged."""
        patch = {}
        if name is not None:
            patch["name"] = name
        if email is not None:
            patch["email"] = email

        user = self.users.update_by_id(user_id, patch)
        logger.info(f"Updated profile for user {user.id}: {sorted(patch)}")
        return user

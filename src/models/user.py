"""User model."""

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import Column, Integer, String

from src.database import Base
from src.exceptions import ValidationFailedError
from src.models.mixins import TimestampMixin

NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255


class User(Base, TimestampMixin):
    """User model holding identity and credentials."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    email = Column(String(EMAIL_MAX_LENGTH), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"


def normalize_email(email: str) -> str:
    """Trim and lowercase an email; this is the uniqueness key."""
    return email.strip().lower()


def normalize_name(name: str) -> str:
    """Validate and trim a display name."""
    if not isinstance(name, str):
        raise ValidationFailedError("Name must be a string")
    name = name.strip()
    if not name:
        raise ValidationFailedError("Name is required")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationFailedError(f"Name must be at most {NAME_MAX_LENGTH} characters")
    return name


def validate_normalized_email(email: str) -> str:
    """Normalize an email and check that it is well formed."""
    if not isinstance(email, str):
        raise ValidationFailedError("Email must be a string")
    email = normalize_email(email)
    if not email:
        raise ValidationFailedError("Email is required")
    if len(email) > EMAIL_MAX_LENGTH:
        raise ValidationFailedError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationFailedError(f"Invalid email: {e}") from e
    return email


def normalize_user_fields(
    name: str | None = None,
    email: str | None = None,
) -> dict[str, str]:
    """Validate the writable user fields before they reach the store.

    Only the fields that are passed are checked and returned, so the same
    function serves full inserts and partial updates.
    """
    fields: dict[str, str] = {}
    if name is not None:
        fields["name"] = normalize_name(name)
    if email is not None:
        fields["email"] = validate_normalized_email(email)
    return fields

"""Issuing and verifying signed bearer tokens."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from src.config import Settings
from src.exceptions import InvalidSignatureError, TokenExpiredError

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Stateless JWT tokens carrying a user id in the ``sub`` claim.

    Expiry is checked against the service clock rather than inside
    ``jwt.decode`` so verification time can be controlled.
    """

    def __init__(self, settings: Settings, clock: Callable[[], datetime] = _utc_now):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.lifetime = timedelta(minutes=settings.jwt_expiration_minutes)
        self.clock = clock

    def issue(self, subject_id: int | str) -> str:
        """Create a token for a user id, valid for the configured lifetime."""
        issued_at = self.clock()
        to_encode = {
            "sub": str(subject_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.lifetime).timestamp()),
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Validate a token and return its subject id.

        Raises:
            InvalidSignatureError: the token is malformed or was not signed with our secret.
            TokenExpiredError: the token is past its ``exp`` claim.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidSignatureError() from e

        subject = payload.get("sub")
        expires_at = payload.get("exp")
        if not isinstance(subject, str) or not subject or not isinstance(expires_at, int):
            raise InvalidSignatureError("Token is missing required claims")

        if self.clock().timestamp() > expires_at:
            logger.debug(f"Token for subject {subject} expired")
            raise TokenExpiredError()

        return subject

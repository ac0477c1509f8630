"""Password hashing with bcrypt."""

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """One-way salted password hashing.

    Hashes are self-describing bcrypt strings: algorithm, cost and salt are
    embedded in the output, so verification needs nothing but the hash.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, plaintext: str) -> str:
        """Hash a password with a fresh salt."""
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Verify a password against its hash. Returns False on any mismatch."""
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError) as e:
            # Unrecognized or corrupted hash string
            logger.warning(f"Password hash could not be verified: {e}")
            return False

"""bcrypt password hashing."""

from dataclasses import dataclass

import bcrypt

from food_ordering.services.users import PasswordHasher


@dataclass
class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt hashes with a configurable cost factor."""

    rounds: int = 12

    def hash(self, password: str) -> str:
        """Return a salted hash of the password."""
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(self.rounds))
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return true when the password matches the hash."""
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except ValueError:
            # Malformed stored hash.
            return False

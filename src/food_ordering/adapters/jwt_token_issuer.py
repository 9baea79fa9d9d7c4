"""JWT bearer tokens signed with python-jose."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from food_ordering.domain.errors import AuthError
from food_ordering.services.users import TokenIssuer


@dataclass
class JwtTokenIssuer(TokenIssuer):
    """Issues HMAC-signed JWTs with an expiry."""

    secret: str
    algorithm: str = "HS256"
    default_expiry: timedelta = field(default_factory=lambda: timedelta(hours=12))

    def issue(
        self, claims: dict[str, object], expires_in: timedelta | None = None
    ) -> str:
        """Return a signed token embedding the claims."""
        now = datetime.now(tz=UTC)
        payload = {
            **claims,
            "iat": now,
            "exp": now + (expires_in or self.default_expiry),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, object]:
        """Return the claims of a valid, unexpired token."""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as exc:
            raise AuthError("Invalid token") from exc

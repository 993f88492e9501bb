"""JWT verification for identity-provider tokens.

Tokens are minted by the external identity provider (HS256, shared
secret). This module only verifies them; ``create_access_token`` exists
so tests and local tooling can mint tokens the same way the provider does.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt
from pydantic import BaseModel

from app.core.config import settings


class TokenPayload(BaseModel):
    """Schema for JWT token payload."""

    sub: str  # Subject (user_id)
    exp: datetime  # Expiration time
    email: str | None = None
    role: str | None = None


class Identity(BaseModel):
    """The authenticated requester, as far as this service cares."""

    id: UUID
    email: str | None = None


class TokenService:
    """Service for JWT token operations.

    Example:
        token_service = TokenService()
        token = token_service.create_access_token(user_id, email="a@b.c")
        payload = token_service.decode_token(token)
    """

    def __init__(
        self,
        secret_key: str = settings.SECRET_KEY,
        algorithm: str = settings.JWT_ALGORITHM,
        audience: str | None = settings.JWT_AUDIENCE,
    ) -> None:
        """Initialize the token service.

        Args:
            secret_key: Secret shared with the identity provider
            algorithm: JWT algorithm (default: HS256)
            audience: Expected audience claim, None to skip the check
        """
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._audience = audience

    def create_access_token(
        self,
        user_id: UUID | str,
        email: str | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a JWT access token shaped like the provider's.

        Args:
            user_id: The user's unique identifier
            email: Optional email claim
            expires_delta: Optional custom expiration time

        Returns:
            Encoded JWT access token string
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "exp": now + expires_delta,
            "iat": now,
            "role": "authenticated",
        }
        if email:
            payload["email"] = email
        if self._audience:
            payload["aud"] = self._audience

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode_token(self, token: str) -> TokenPayload | None:
        """Decode and validate a JWT token.

        Args:
            token: The JWT token string

        Returns:
            TokenPayload if valid, None otherwise
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                options={"verify_aud": self._audience is not None},
            )
            return TokenPayload(
                sub=payload["sub"],
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                email=payload.get("email"),
                role=payload.get("role"),
            )
        except (JWTError, KeyError):
            return None

    def get_identity(self, token: str) -> Identity | None:
        """Resolve a token to the requester's identity.

        Returns:
            Identity if the token is valid and its subject is a UUID
        """
        payload = self.decode_token(token)
        if payload is None:
            return None
        try:
            return Identity(id=UUID(payload.sub), email=payload.email)
        except ValueError:
            return None


# Global token service instance
token_service = TokenService()


def create_access_token(
    user_id: UUID | str,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token."""
    return token_service.create_access_token(user_id, email, expires_delta)

"""
JWT token service.

Access tokens are short lived and carry the session they belong to; refresh
tokens are long lived and are stored on the session so they can be rotated.
Both are HMAC signed with separate secrets.

Usage Example:
    tokens = TokenService(settings.security)
    access = tokens.create_access_token(user.id, session.id, Role.AUDITOR)
    claims = tokens.decode_access_token(access)
"""

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt

from auditoria.core.config import SecurityConfig
from auditoria.core.domain.base import utc_now
from auditoria.core.errors import ConfigurationError, UnauthorizedError
from auditoria.core.logging import get_logger
from auditoria.modules.identity.domain.enums import Role

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"
MIN_SECRET_LENGTH = 32


@dataclass(frozen=True)
class AccessTokenClaims:
    """Verified content of an access token."""

    user_id: UUID
    session_id: UUID
    role: str
    expires_at: datetime


class TokenService:
    """Create and verify the JWTs handed out at login."""

    def __init__(self, config: SecurityConfig):
        self.config = config
        self._validate_secrets()

    def _validate_secrets(self) -> None:
        if len(self.config.access_token_secret) < MIN_SECRET_LENGTH:
            raise ConfigurationError(
                f"Access token secret must be at least {MIN_SECRET_LENGTH} characters",
                config_key="JWT_SECRET",
            )
        if len(self.config.refresh_token_secret) < MIN_SECRET_LENGTH:
            raise ConfigurationError(
                f"Refresh token secret must be at least {MIN_SECRET_LENGTH} characters",
                config_key="JWT_REFRESH_SECRET",
            )
        if self.config.access_token_secret == self.config.refresh_token_secret:
            raise ConfigurationError(
                "Access and refresh token secrets must be different",
                config_key="JWT_REFRESH_SECRET",
            )

    @property
    def access_token_lifetime(self) -> timedelta:
        return timedelta(minutes=self.config.access_token_expire_minutes)

    @property
    def refresh_token_lifetime(self) -> timedelta:
        return timedelta(days=self.config.refresh_token_expire_days)

    def refresh_token_expiry(self) -> datetime:
        """Expiry to store on a session for a refresh token issued now."""
        return utc_now() + self.refresh_token_lifetime

    def create_access_token(self, user_id: UUID, session_id: UUID, role: Role | str) -> str:
        """
        Create an access token bound to ``session_id``.

        The role claim records the role at issue time only; requests resolve
        the acting role from the session itself.
        """
        claims = {
            "sid": str(session_id),
            "role": role.value if isinstance(role, Role) else str(role),
        }
        return self._encode(
            user_id,
            ACCESS_TOKEN_TYPE,
            self.access_token_lifetime,
            self.config.access_token_secret,
            claims,
        )

    def create_refresh_token(self, user_id: UUID) -> str:
        return self._encode(
            user_id,
            REFRESH_TOKEN_TYPE,
            self.refresh_token_lifetime,
            self.config.refresh_token_secret,
        )

    def decode_access_token(self, token: str) -> AccessTokenClaims:
        """
        Verify an access token.

        Raises:
            UnauthorizedError: If the token is malformed, expired or forged
        """
        payload = self._decode(token, self.config.access_token_secret, ACCESS_TOKEN_TYPE)
        try:
            return AccessTokenClaims(
                user_id=UUID(payload["sub"]),
                session_id=UUID(payload["sid"]),
                role=str(payload.get("role") or ""),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise _invalid_token("Malformed access token claims") from e

    def decode_refresh_token(self, token: str) -> UUID:
        """
        Verify a refresh token and return the user it was issued to.

        Raises:
            UnauthorizedError: If the token is malformed, expired or forged
        """
        payload = self._decode(token, self.config.refresh_token_secret, REFRESH_TOKEN_TYPE)
        try:
            return UUID(payload["sub"])
        except (KeyError, TypeError, ValueError) as e:
            raise _invalid_token("Malformed refresh token claims") from e

    def _encode(
        self,
        user_id: UUID,
        token_type: str,
        lifetime: timedelta,
        secret: str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        now = utc_now()
        claims = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
            "type": token_type,
            "aud": self.config.jwt_audience,
            "iss": self.config.jwt_issuer,
            "jti": secrets.token_urlsafe(16),
        }
        if additional_claims:
            claims.update(additional_claims)

        token = jwt.encode(claims, secret, algorithm=self.config.jwt_algorithm)
        logger.debug(
            "Token created", token_type=token_type, subject=str(user_id), jti=claims["jti"]
        )
        return token

    def _decode(self, token: str, secret: str, expected_type: str) -> dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.config.jwt_algorithm],
                audience=self.config.jwt_audience,
                issuer=self.config.jwt_issuer,
                options={"require": ["exp", "iat", "sub", "type"]},
                leeway=self.config.jwt_clock_skew_seconds,
            )
        except jwt.ExpiredSignatureError as e:
            raise UnauthorizedError(
                "Token expired", code="TOKEN_EXPIRED", user_message="La sesión ha expirado"
            ) from e
        except jwt.PyJWTError as e:
            logger.warning(
                "JWT token validation failed", error=str(e), error_type=type(e).__name__
            )
            raise _invalid_token("Invalid token") from e

        if payload.get("type") != expected_type:
            raise _invalid_token(f"Expected a {expected_type} token")
        return payload


def _invalid_token(message: str) -> UnauthorizedError:
    return UnauthorizedError(message, code="INVALID_TOKEN", user_message="Token inválido")


__all__ = ["AccessTokenClaims", "TokenService"]

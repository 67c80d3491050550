"""
Claims Codec

Signs and verifies access tokens (HS256 JWT). Stateless: the signing key,
default lifetime and clock are injected so that verification is a pure
function of the token and the current time.
"""

import calendar
from datetime import UTC, datetime, timedelta
from typing import Any, Callable, Dict, Optional

from jose import JWTError, jwt

from src.domain.base import utc_now
from src.domain.claims import AccessClaims, Principal
from src.libs.result import Error, Result, Return

ALGORITHM = "HS256"


def _to_epoch(moment: datetime) -> int:
    # Naive datetimes are UTC throughout the service
    return calendar.timegm(moment.utctimetuple())


def _from_epoch(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, UTC).replace(tzinfo=None)


class ClaimsCodec:
    """
    Encodes a Principal into a signed access token and back.

    Payload shape (closed): sub, email, role, iat, exp.
    """

    def __init__(
        self,
        signing_key: str,
        default_ttl: timedelta = timedelta(minutes=15),
        clock: Callable[[], datetime] = utc_now,
    ):
        if not signing_key:
            raise ValueError("Signing key must not be empty")
        if default_ttl <= timedelta(0):
            raise ValueError("Access token lifetime must be positive")
        self.signing_key = signing_key
        self.default_ttl = default_ttl
        self.clock = clock

    def sign(self, principal: Principal, ttl: Optional[timedelta] = None) -> str:
        """
        Sign an access token for principal.

        Args:
            principal: subject, email and role to embed
            ttl: lifetime override, defaults to default_ttl

        Returns:
            JWT string (HS256)
        """
        lifetime = self.default_ttl if ttl is None else ttl
        if lifetime <= timedelta(0):
            raise ValueError("Access token lifetime must be positive")

        issued_at = _to_epoch(self.clock())
        payload = {
            "sub": principal.subject,
            "email": principal.email,
            "role": principal.role.value,
            "iat": issued_at,
            "exp": issued_at + int(lifetime.total_seconds()),
        }
        return jwt.encode(payload, self.signing_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> Result[AccessClaims]:
        """
        Verify signature, shape and expiry of an access token.

        Returns:
            Result with AccessClaims, or Error TOKEN_INVALID / TOKEN_EXPIRED
        """
        try:
            # Expiry is checked against the injected clock below
            payload = jwt.decode(
                token,
                self.signing_key,
                algorithms=[ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError:
            return Return.err(Error("TOKEN_INVALID", "Invalid access token"))

        claims = self._to_claims(payload)
        if claims is None:
            return Return.err(Error("TOKEN_INVALID", "Invalid access token"))

        if _to_epoch(self.clock()) >= _to_epoch(claims.expires_at):
            return Return.err(Error("TOKEN_EXPIRED", "Access token has expired"))

        return Return.ok(claims)

    def decode_unsafe(self, token: str) -> Optional[AccessClaims]:
        """
        Read claims without checking signature or expiry.

        For diagnostics on expired tokens only; never use the result to
        authorize anything.
        """
        try:
            payload = jwt.get_unverified_claims(token)
        except JWTError:
            return None
        return self._to_claims(payload)

    @staticmethod
    def _to_claims(payload: Dict[str, Any]) -> Optional[AccessClaims]:
        try:
            return AccessClaims(
                subject=payload["sub"],
                email=payload["email"],
                role=payload["role"],
                issued_at=_from_epoch(payload["iat"]),
                expires_at=_from_epoch(payload["exp"]),
            )
        except (KeyError, TypeError, ValueError, OverflowError, OSError):
            return None

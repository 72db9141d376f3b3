"""JWT access tokens identifying the acting user.

The token subject (sub) is the user's stable id, the same id used in
events.registeredUsers and as the NGO owner id.
"""

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from eventlink.core.config import get_settings
from eventlink.shared.utils.datetime import utc_now


def create_access_token(
    subject: str,
    *,
    role: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a token for subject, expiring after expires_delta (default from settings)."""
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {"sub": subject, "exp": utc_now() + ttl}
    if role:
        claims["role"] = role
    return jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )


def verify_token(token: str) -> dict[str, Any]:
    """Decode a token, enforcing signature, exp and a non-empty sub.

    Raises:
        ValueError: If the token is invalid, expired, or has no subject.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload

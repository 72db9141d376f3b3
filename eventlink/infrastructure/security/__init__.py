"""Security: JWT access tokens and identity providers."""

from eventlink.infrastructure.security.identity import (
    BearerTokenIdentityProvider,
    StaticIdentityProvider,
)
from eventlink.infrastructure.security.jwt import create_access_token, verify_token

__all__ = [
    "BearerTokenIdentityProvider",
    "StaticIdentityProvider",
    "create_access_token",
    "verify_token",
]

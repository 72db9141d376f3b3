"""Identity providers (implement IIdentityProvider)."""

from eventlink.infrastructure.security.jwt import verify_token
from eventlink.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class BearerTokenIdentityProvider:
    """Actor id from a request's bearer token; None when absent or invalid."""

    def __init__(self, token: str | None) -> None:
        self._token = token
        self._resolved = False
        self._actor_id: str | None = None

    def current_actor_id(self) -> str | None:
        if not self._resolved:
            self._resolved = True
            if self._token:
                try:
                    self._actor_id = verify_token(self._token)["sub"]
                except ValueError as e:
                    logger.info("Rejected bearer token: %s", e)
        return self._actor_id


class StaticIdentityProvider:
    """Fixed actor id, for scripts and tests."""

    def __init__(self, actor_id: str | None) -> None:
        self._actor_id = actor_id

    def current_actor_id(self) -> str | None:
        return self._actor_id

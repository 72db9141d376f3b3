"""Service interfaces (ports) for the application layer."""

from typing import Protocol


class IIdentityProvider(Protocol):
    """Supplies the acting user's stable id for the current request."""

    def current_actor_id(self) -> str | None:
        """Return the actor id, or None when unauthenticated."""

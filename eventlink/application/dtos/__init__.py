"""Application DTOs (no store dependency)."""

from eventlink.application.dtos.event import CreateEventCommand
from eventlink.application.dtos.profile import SaveNgoProfileCommand

__all__ = [
    "CreateEventCommand",
    "SaveNgoProfileCommand",
]

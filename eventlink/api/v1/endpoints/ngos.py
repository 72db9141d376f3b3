"""NGO directory and profile routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from eventlink.api.v1.dependencies import get_actor_id, get_ngo_profile_service
from eventlink.application.use_cases import NgoProfileService
from eventlink.core.limiter import limit_writes
from eventlink.schemas.profile import (
    NgoDirectoryEntry,
    NgoProfileRequest,
    NgoProfileResponse,
)

router = APIRouter()


@router.get("", response_model=list[NgoDirectoryEntry])
async def list_ngos(
    profiles: Annotated[NgoProfileService, Depends(get_ngo_profile_service)],
):
    """Public NGO directory with per-NGO event counts."""
    return [NgoDirectoryEntry.from_entry(e) for e in await profiles.list_ngos()]


@router.put("/me", response_model=NgoProfileResponse)
@limit_writes
async def save_my_profile(
    request: Request,
    body: NgoProfileRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    profiles: Annotated[NgoProfileService, Depends(get_ngo_profile_service)],
):
    """Save the caller's NGO profile; required before creating events."""
    profile = await profiles.save_ngo_profile(actor_id, body.to_command())
    return NgoProfileResponse.from_entity(profile)


@router.get("/{owner_id}", response_model=NgoProfileResponse)
async def get_ngo(
    owner_id: str,
    profiles: Annotated[NgoProfileService, Depends(get_ngo_profile_service)],
):
    return NgoProfileResponse.from_entity(await profiles.get_ngo_profile(owner_id))

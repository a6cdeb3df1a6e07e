"""Endpoints for the authenticated caller's own account."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from lynkai.api.v1.deps import get_profile_service
from lynkai.api.v1.errors import raise_for_result
from lynkai.api.v1.identity import Identity, require_identity
from lynkai.schemas.auth import MessageResponse
from lynkai.schemas.users import ChangePasswordRequest, UpdateProfileRequest, UserProfile
from lynkai.services.profile import ProfileService

router = APIRouter()

Caller = Annotated[Identity, Depends(require_identity)]
Profiles = Annotated[ProfileService, Depends(get_profile_service)]


@router.get("/me", response_model=UserProfile)
def get_me(identity: Caller, profiles: Profiles) -> UserProfile:
    result = profiles.get(identity.user_id)
    raise_for_result(result)
    return UserProfile.model_validate(result.value)


@router.patch("/me", response_model=UserProfile)
def update_me(body: UpdateProfileRequest, identity: Caller, profiles: Profiles) -> UserProfile:
    result = profiles.update(identity.user_id, username=body.username, email=body.email)
    raise_for_result(result)
    return UserProfile.model_validate(result.value)


@router.post("/me/password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest, identity: Caller, profiles: Profiles
) -> MessageResponse:
    raise_for_result(
        profiles.change_password(identity.user_id, body.old_password, body.new_password)
    )
    return MessageResponse(message="Password changed.")


@router.get("/{user_id}", response_model=UserProfile)
def get_user(user_id: int, identity: Caller, profiles: Profiles) -> UserProfile:
    """Users may only read their own record."""
    if user_id != identity.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    result = profiles.get(user_id)
    raise_for_result(result)
    return UserProfile.model_validate(result.value)

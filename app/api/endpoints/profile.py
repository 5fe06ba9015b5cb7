"""Profile API: the authenticated user's own account."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.dependencies import CurrentUser, get_actor, get_profile_service
from app.application.services import Actor, ProfileService
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.profile import PasswordChangeRequest, ProfileUpdateRequest
from app.schemas.user import UserData, UserOut

router = APIRouter()

Profile = Annotated[ProfileService, Depends(get_profile_service)]


@router.get("", response_model=ApiResponse[UserData])
async def get_profile(current_user: CurrentUser):
    """Current user with roles and flattened permissions."""
    return ApiResponse(data=UserData(user=UserOut.model_validate(current_user)))


@router.put("", response_model=ApiResponse[UserData])
async def update_profile(
    body: ProfileUpdateRequest,
    profile_service: Profile,
    actor: Annotated[Actor, Depends(get_actor)],
    current_user: CurrentUser,
):
    user = await profile_service.update_profile(
        current_user.id, body.model_dump(exclude_unset=True), actor=actor
    )
    return ApiResponse(
        message="Profile updated successfully",
        data=UserData(user=UserOut.model_validate(user)),
    )


@router.put("/password", response_model=MessageResponse)
async def change_password(
    body: PasswordChangeRequest,
    profile_service: Profile,
    actor: Annotated[Actor, Depends(get_actor)],
    current_user: CurrentUser,
) -> MessageResponse:
    """Change password. 400 when the current one is wrong or the new one is weak or unchanged."""
    await profile_service.change_password(
        current_user.id, body.current_password, body.new_password, actor=actor
    )
    return MessageResponse(message="Password changed successfully")

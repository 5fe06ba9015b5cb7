"""User management API. Every route is gated by a users.* permission."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.dependencies import (
    get_actor,
    get_user_query_service,
    get_user_service,
    require_permission,
)
from app.application.services import Actor, UserService, pagination_meta
from app.core.limiter import limit_writes
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.user import (
    UserCreateRequest,
    UserData,
    UserListParams,
    UserListResponse,
    UserOut,
    UserStats,
    UserUpdateRequest,
)

router = APIRouter()

QueryService = Annotated[UserService, Depends(get_user_query_service)]
WriteService = Annotated[UserService, Depends(get_user_service)]
WriteActor = Annotated[Actor, Depends(get_actor)]


@router.get(
    "",
    response_model=UserListResponse,
    dependencies=[Depends(require_permission("users.read"))],
)
async def list_users(
    params: Annotated[UserListParams, Query()],
    user_service: QueryService,
) -> UserListResponse:
    """Paginated, searchable, sortable user list."""
    page = await user_service.list_users(
        page=params.page,
        limit=params.limit,
        search=params.search,
        sort_by=params.sort_by,
        sort_order=params.sort_order,
    )
    return UserListResponse(
        data=[UserOut.model_validate(u) for u in page.items],
        pagination=pagination_meta(page),
    )


@router.get(
    "/stats",
    response_model=ApiResponse[UserStats],
    dependencies=[Depends(require_permission("users.read"))],
)
async def user_stats(user_service: QueryService):
    return ApiResponse(data=UserStats(**await user_service.stats()))


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserData],
    dependencies=[Depends(require_permission("users.read"))],
)
async def get_user(user_id: str, user_service: QueryService):
    user = await user_service.get_user(user_id)
    return ApiResponse(data=UserData(user=UserOut.model_validate(user)))


@router.post(
    "",
    response_model=ApiResponse[UserData],
    status_code=201,
    dependencies=[Depends(require_permission("users.write"))],
)
@limit_writes
async def create_user(
    request: Request,
    body: UserCreateRequest,
    user_service: WriteService,
    actor: WriteActor,
):
    """Create a user. 409 on duplicate email/username, 400 on unknown role ids."""
    user = await user_service.create_user(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        username=body.username,
        role_ids=body.role_ids,
        is_active=body.is_active,
        actor=actor,
    )
    return ApiResponse(
        message="User created successfully",
        data=UserData(user=UserOut.model_validate(user)),
    )


@router.put(
    "/{user_id}",
    response_model=ApiResponse[UserData],
    dependencies=[Depends(require_permission("users.write"))],
)
@limit_writes
async def update_user(
    request: Request,
    user_id: str,
    body: UserUpdateRequest,
    user_service: WriteService,
    actor: WriteActor,
):
    """Partial update; role_ids replaces all role assignments when given."""
    user = await user_service.update_user(
        user_id, body.model_dump(exclude_unset=True), actor=actor
    )
    return ApiResponse(
        message="User updated successfully",
        data=UserData(user=UserOut.model_validate(user)),
    )


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_permission("users.delete"))],
)
@limit_writes
async def delete_user(
    request: Request,
    user_id: str,
    user_service: WriteService,
    actor: WriteActor,
) -> MessageResponse:
    """Delete a user. 400 when it is the last admin."""
    await user_service.delete_user(user_id, actor=actor)
    return MessageResponse(message="User deleted successfully")

"""Role management API. Reads need roles.read, writes roles.write."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.dependencies import (
    get_actor,
    get_role_query_service,
    get_role_service,
    require_permission,
)
from app.application.services import Actor, RoleService
from app.core.limiter import limit_writes
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.role import (
    PermissionOut,
    RoleCreateRequest,
    RoleData,
    RoleDetailOut,
    RoleListParams,
    RoleUpdateRequest,
)

router = APIRouter()

QueryService = Annotated[RoleService, Depends(get_role_query_service)]
WriteService = Annotated[RoleService, Depends(get_role_service)]
WriteActor = Annotated[Actor, Depends(get_actor)]


@router.get(
    "",
    response_model=ApiResponse[list[RoleDetailOut]],
    dependencies=[Depends(require_permission("roles.read"))],
)
async def list_roles(
    params: Annotated[RoleListParams, Query()],
    role_service: QueryService,
):
    roles = await role_service.list_roles(params.search)
    return ApiResponse(data=[RoleDetailOut.model_validate(r) for r in roles])


@router.get(
    "/permissions",
    response_model=ApiResponse[list[PermissionOut]],
    dependencies=[Depends(require_permission("roles.read"))],
)
async def list_permissions(role_service: QueryService):
    """Every permission that can be granted to a role."""
    permissions = await role_service.list_permissions()
    return ApiResponse(data=[PermissionOut.model_validate(p) for p in permissions])


@router.get(
    "/{role_id}",
    response_model=ApiResponse[RoleData],
    dependencies=[Depends(require_permission("roles.read"))],
)
async def get_role(role_id: str, role_service: QueryService):
    role = await role_service.get_role(role_id)
    return ApiResponse(data=RoleData(role=RoleDetailOut.model_validate(role)))


@router.post(
    "",
    response_model=ApiResponse[RoleData],
    status_code=201,
    dependencies=[Depends(require_permission("roles.write"))],
)
@limit_writes
async def create_role(
    request: Request,
    body: RoleCreateRequest,
    role_service: WriteService,
    actor: WriteActor,
):
    """Create a role. 409 on a taken name, 400 on unknown permission ids."""
    role = await role_service.create_role(
        name=body.name,
        display_name=body.display_name,
        description=body.description,
        is_active=body.is_active,
        permission_ids=body.permission_ids,
        actor=actor,
    )
    return ApiResponse(
        message="Role created successfully",
        data=RoleData(role=RoleDetailOut.model_validate(role)),
    )


@router.put(
    "/{role_id}",
    response_model=ApiResponse[RoleData],
    dependencies=[Depends(require_permission("roles.write"))],
)
@limit_writes
async def update_role(
    request: Request,
    role_id: str,
    body: RoleUpdateRequest,
    role_service: WriteService,
    actor: WriteActor,
):
    role = await role_service.update_role(
        role_id, body.model_dump(exclude_unset=True), actor=actor
    )
    return ApiResponse(
        message="Role updated successfully",
        data=RoleData(role=RoleDetailOut.model_validate(role)),
    )


@router.delete(
    "/{role_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_permission("roles.write"))],
)
@limit_writes
async def delete_role(
    request: Request,
    role_id: str,
    role_service: WriteService,
    actor: WriteActor,
) -> MessageResponse:
    """Delete a custom role. 400 for system roles and roles still assigned."""
    await role_service.delete_role(role_id, actor=actor)
    return MessageResponse(message="Role deleted successfully")

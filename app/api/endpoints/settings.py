"""Settings API: list, read by key, update. Gated by settings.read / settings.write."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.dependencies import (
    get_actor,
    get_setting_query_service,
    get_setting_service,
    require_permission,
)
from app.application.services import Actor, SettingService
from app.core.limiter import limit_writes
from app.schemas.common import ApiResponse
from app.schemas.setting import (
    SettingData,
    SettingListParams,
    SettingOut,
    SettingUpdateRequest,
)

router = APIRouter()

QueryService = Annotated[SettingService, Depends(get_setting_query_service)]


@router.get(
    "",
    response_model=ApiResponse[list[SettingOut]],
    dependencies=[Depends(require_permission("settings.read"))],
)
async def list_settings(
    params: Annotated[SettingListParams, Query()],
    setting_service: QueryService,
):
    settings = await setting_service.list_settings(params.category)
    return ApiResponse(data=[SettingOut.model_validate(s) for s in settings])


@router.get(
    "/{key}",
    response_model=ApiResponse[SettingData],
    dependencies=[Depends(require_permission("settings.read"))],
)
async def get_setting(key: str, setting_service: QueryService):
    setting = await setting_service.get_setting(key)
    return ApiResponse(data=SettingData(setting=SettingOut.model_validate(setting)))


@router.put(
    "/{key}",
    response_model=ApiResponse[SettingData],
    dependencies=[Depends(require_permission("settings.write"))],
)
@limit_writes
async def update_setting(
    request: Request,
    key: str,
    body: SettingUpdateRequest,
    setting_service: Annotated[SettingService, Depends(get_setting_service)],
    actor: Annotated[Actor, Depends(get_actor)],
):
    setting = await setting_service.update_setting(
        key, body.model_dump(exclude_unset=True), actor=actor
    )
    return ApiResponse(
        message="Setting updated successfully",
        data=SettingData(setting=SettingOut.model_validate(setting)),
    )

"""Auth API: login (rate limited)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_auth_service
from app.application.services import AuthService
from app.core.limiter import limit_auth
from app.schemas.auth import LoginData, LoginRequest
from app.schemas.common import ApiResponse
from app.schemas.user import UserOut

router = APIRouter()


@router.post("/login", response_model=ApiResponse[LoginData])
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Authenticate with email and password; return a bearer JWT and the user."""
    client_ip = request.client.host if request.client else None
    result = await auth_service.login(body.email, body.password, ip_address=client_ip)
    return ApiResponse(
        message="Login successful",
        data=LoginData(
            access_token=result.access_token,
            token_type=result.token_type,
            expires_in=result.expires_in,
            user=UserOut.model_validate(result.user),
        ),
    )

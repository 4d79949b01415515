from typing import Annotated

from fastapi import APIRouter, Depends

from src.core.schemas import SuccessResponse
from src.identity.schemas import LoginRequest, RefreshRequest, TokenResponse
from src.identity.usecases.login import LoginUseCase, get_login_use_case
from src.identity.usecases.logout import LogoutUseCase, get_logout_use_case
from src.identity.usecases.refresh import (
    RefreshTokensUseCase,
    get_refresh_tokens_use_case,
)
from src.user.schemas import SignInRequest
from src.user.usecases.sign_in import SignInUseCase, get_sign_in_use_case

router = APIRouter()


@router.post("/signin", status_code=201, response_model=SuccessResponse)
async def sign_in(
    data: SignInRequest,
    use_case: Annotated[SignInUseCase, Depends(get_sign_in_use_case)],
) -> SuccessResponse:
    """
    Register a new user. The e-mail becomes the login.
    """
    return await use_case.execute(data=data)


@router.post("/login", status_code=200, response_model=TokenResponse)
async def login(
    data: LoginRequest,
    use_case: Annotated[LoginUseCase, Depends(get_login_use_case)],
) -> TokenResponse:
    """
    Exchange login and password for an access/refresh token pair.
    """
    return await use_case.execute(data=data)


@router.post("/refresh", status_code=200, response_model=TokenResponse)
async def refresh(
    data: RefreshRequest,
    use_case: Annotated[RefreshTokensUseCase, Depends(get_refresh_tokens_use_case)],
) -> TokenResponse:
    """
    Exchange the current refresh token for a new pair. The presented token
    stops being valid once this call succeeds.
    """
    return await use_case.execute(data=data)


@router.post("/logout", status_code=200, response_model=SuccessResponse)
async def logout(
    data: RefreshRequest,
    use_case: Annotated[LogoutUseCase, Depends(get_logout_use_case)],
) -> SuccessResponse:
    """
    End the session of the refresh token's owner.
    """
    return await use_case.execute(data=data)

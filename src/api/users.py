"""User account API endpoints.

Handlers are plain ``def`` so FastAPI runs them in its threadpool; bcrypt
work in one request never blocks the event loop for the others.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_account_service, get_current_user_id
from src.schemas.auth import (
    AuthData,
    ErrorResponse,
    ProfileUpdate,
    SuccessResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.services.accounts import AccountService

router = APIRouter(prefix="/api/users", tags=["users"])

_AUTH_ERRORS = {
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


@router.post(
    "/register",
    response_model=SuccessResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
def register(
    user_data: UserRegister,
    accounts: Annotated[AccountService, Depends(get_account_service)],
):
    """Register a new user."""
    user, token = accounts.register(user_data.name, user_data.email, user_data.password)
    return SuccessResponse[AuthData](
        data=AuthData(id=user.id, name=user.name, email=user.email, token=token)
    )


@router.post(
    "/login",
    response_model=SuccessResponse[AuthData],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    },
)
def login(
    credentials: UserLogin,
    accounts: Annotated[AccountService, Depends(get_account_service)],
):
    """Login with email and password."""
    user, token = accounts.login(credentials.email, credentials.password)
    return SuccessResponse[AuthData](
        data=AuthData(id=user.id, name=user.name, email=user.email, token=token)
    )


@router.get("/profile", response_model=SuccessResponse[UserResponse], responses=_AUTH_ERRORS)
def get_profile(
    user_id: Annotated[str, Depends(get_current_user_id)],
    accounts: Annotated[AccountService, Depends(get_account_service)],
):
    """Get the authenticated user's profile."""
    user = accounts.get_profile(user_id)
    return SuccessResponse[UserResponse](data=UserResponse.model_validate(user))


@router.put(
    "/profile",
    response_model=SuccessResponse[UserResponse],
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}, **_AUTH_ERRORS},
)
def update_profile(
    updates: ProfileUpdate,
    user_id: Annotated[str, Depends(get_current_user_id)],
    accounts: Annotated[AccountService, Depends(get_account_service)],
):
    """Update the authenticated user's name and/or email."""
    user = accounts.update_profile(user_id, name=updates.name, email=updates.email)
    return SuccessResponse[UserResponse](data=UserResponse.model_validate(user))

"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    AuthData,
    ErrorResponse,
    ProfileUpdate,
    SuccessResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)

__all__ = [
    "AuthData",
    "ErrorResponse",
    "ProfileUpdate",
    "SuccessResponse",
    "UserLogin",
    "UserRegister",
    "UserResponse",
]

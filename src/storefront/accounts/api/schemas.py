"""Pydantic request/response schemas for registration and login."""

from datetime import datetime

from pydantic import Field

from storefront.shared.schemas import ApiModel


class RegisterRequest(ApiModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(ApiModel):
    email: str
    password: str


class UserResponse(ApiModel):
    id: str
    username: str
    email: str
    is_admin: bool
    created_at: datetime | None = None


class AuthResponse(ApiModel):
    user: UserResponse

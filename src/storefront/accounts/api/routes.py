"""FastAPI routes for account registration and login."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.accounts.api.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from storefront.accounts.user.authentication import authenticate
from storefront.accounts.user.registration import register_user
from storefront.accounts.user.user import User

auth_router = APIRouter(prefix="/auth", tags=["auth"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        username=user.username,
        email=user.email,
        is_admin=bool(user.is_admin),
        created_at=user.created_at,
    )


@auth_router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterRequest) -> AuthResponse:
    user_id = register_user(username=body.username, email=body.email, password=body.password)
    user = current_domain.repository_for(User).get(user_id)
    return AuthResponse(user=_user_response(user))


@auth_router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest) -> AuthResponse:
    return AuthResponse(user=_user_response(authenticate(body.email, body.password)))

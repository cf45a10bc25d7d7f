"""
Account endpoints for API v1.

Registration, login and the current user.  Login returns a bearer
token to be sent as ``Authorization: Bearer <token>`` on every other
authenticated request.
"""

from fastapi import APIRouter, Depends, status

from agri_market_api.app.core.errors import UnauthenticatedError
from agri_market_api.app.core.security import create_access_token, get_current_user
from agri_market_api.app.schemas.user import LoginRequest, TokenResponse, UserCreate, UserRead
from agri_market_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate) -> UserRead:
    """Register a new user with one of the marketplace roles."""
    return await UserService.create_user(user)


@router.post("/login", response_model=TokenResponse)
async def login_user(credentials: LoginRequest) -> TokenResponse:
    """Check the credentials and return an access token."""
    user = await UserService.authenticate(credentials.username, credentials.password)
    if not user:
        raise UnauthenticatedError("Invalid credentials")
    token = create_access_token({"sub": user.username})
    return TokenResponse(access_token=token, user=user)


@router.get("/user", response_model=UserRead)
async def read_current_user(current_user: dict = Depends(get_current_user)) -> UserRead:
    return await UserService.get_current(current_user)

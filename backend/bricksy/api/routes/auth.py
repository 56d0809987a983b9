"""
Authentication routes for register, login, and logout.
"""
from fastapi import APIRouter, Depends
from bricksy.api.dependencies import get_auth_service, get_current_identity
from bricksy.core.security import TokenIdentity
from bricksy.schemas.user import (
    AuthResponse, LoginRequest, MessageResponse, RegisterRequest, UserResponse
)
from bricksy.services.auth_service import AuthService

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=AuthResponse)
def register(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user and return a token."""
    result = service.register(payload)
    return AuthResponse(
        message="Registered",
        token=result.token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get JWT token."""
    result = service.login(credentials)
    return AuthResponse(
        message="Logged in",
        token=result.token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(identity: TokenIdentity = Depends(get_current_identity)):
    """Logout (client-side token removal)."""
    # Tokens are stateless; the client discards its copy
    return MessageResponse(message="Logged out")

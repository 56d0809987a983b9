"""
User profile routes.
"""
from fastapi import APIRouter, Depends
from bricksy.api.dependencies import get_current_user
from bricksy.models.user import User
from bricksy.schemas.user import MeResponse, UserResponse

router = APIRouter(tags=["users"])


@router.get("/me", response_model=MeResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return MeResponse(user=UserResponse.model_validate(current_user))

"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from bricksy.api.routes import auth, users

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)


@api_router.get("/health")
def health():
    """Health check endpoint."""
    return {"ok": True}

"""Models package - Import all models for SQLAlchemy registration."""
from bricksy.models.user import User

__all__ = [
    "User",
]

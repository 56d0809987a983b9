"""
Shared route dependencies: store injection and the bearer-token guard.
"""
from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session
from bricksy.core.errors import InvalidToken, NoToken
from bricksy.core.security import TokenIdentity, verify_token
from bricksy.db.session import get_db
from bricksy.models.user import User
from bricksy.repositories.user_repository import UserRepository
from bricksy.services.auth_service import AuthService


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_auth_service(users: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(users)


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise NoToken()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise NoToken()
    return token.strip()


def get_current_identity(token: str = Depends(get_bearer_token)) -> TokenIdentity:
    """Verify the bearer token. Raises NoToken or InvalidToken."""
    try:
        return verify_token(token)
    except InvalidToken:
        raise
    except ValueError as exc:
        # Malformed segments that jose does not wrap in JWTError
        raise InvalidToken() from exc


def get_current_user(
    identity: TokenIdentity = Depends(get_current_identity),
    service: AuthService = Depends(get_auth_service),
) -> User:
    """Load the user the token was issued for."""
    return service.get_user(identity.id)

"""
Registration and login flows.
"""
from dataclasses import dataclass
from typing import Optional
import logging
import re
from fastapi import status
from jose import JWTError
from sqlalchemy.exc import SQLAlchemyError
from bricksy.core.config import Settings, settings as default_settings
from bricksy.core.errors import (
    DuplicateEmail,
    InternalError,
    InvalidCredentials,
    InvalidEmail,
    InvalidPassword,
    PasswordTooShort,
    UserNotFound,
    ValidationError,
)
from bricksy.core.security import get_password_hash, issue_token, verify_password
from bricksy.models.user import User
from bricksy.repositories.user_repository import UserRepository, normalize_email
from bricksy.schemas.user import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

# local@domain.tld, nothing stricter
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Failures of the store, bcrypt (ValueError on a malformed hash) or token signing
_INFRASTRUCTURE_ERRORS = (SQLAlchemyError, ValueError, JWTError)


@dataclass
class AuthResult:
    """Token plus the stored user it was issued for."""
    token: str
    user: User


class AuthService:
    """Registration and login against an injected credential store."""

    def __init__(self, users: UserRepository, settings: Optional[Settings] = None):
        self.users = users
        self.settings = settings or default_settings

    def register(self, payload: RegisterRequest) -> AuthResult:
        """
        Register a new user and issue a token.

        Input is validated before the store is touched. The email pre-check
        only saves a bcrypt round; the store's unique constraint decides
        duplicates. If token issuance fails after the insert the row stays.
        """
        email = normalize_email(payload.email)
        password = payload.password or ""

        if not email or not password:
            raise ValidationError()
        if not EMAIL_PATTERN.match(email):
            raise InvalidEmail()
        min_length = self.settings.MIN_PASSWORD_LENGTH
        if len(password) < min_length:
            raise PasswordTooShort(min_length)

        try:
            if self.users.find_by_email(email) is not None:
                raise DuplicateEmail()

            password_hash = get_password_hash(password)
            user = self.users.insert({
                "nombre": payload.nombre or "",
                "apellidos": payload.apellidos or "",
                "residencia": payload.residencia or "",
                "fecha_nacimiento": payload.fecha_nacimiento,
                "email": email,
                "telefono": payload.telefono,
                "password_hash": password_hash,
            })
            token = issue_token(user)
        except DuplicateEmail:
            logger.info(f"Registration rejected, email already registered: {email}")
            raise
        except _INFRASTRUCTURE_ERRORS as exc:
            logger.error(f"Registration failed for {email}: {exc}", exc_info=True)
            raise InternalError() from exc

        logger.info(f"Registered user {user.id}")
        return AuthResult(token=token, user=user)

    def login(self, payload: LoginRequest) -> AuthResult:
        """Verify credentials and issue a token."""
        email = normalize_email(payload.email)
        password = payload.password or ""

        if not email or not password:
            raise InvalidCredentials()

        try:
            user = self.users.find_by_email(email)
            if user is None:
                logger.info(f"Login for unknown email {email}")
                raise UserNotFound(status_code=status.HTTP_401_UNAUTHORIZED)

            if not verify_password(password, user.password_hash):
                logger.warning(f"Wrong password for user {user.id}")
                raise InvalidPassword()

            token = issue_token(user)
        except _INFRASTRUCTURE_ERRORS as exc:
            logger.error(f"Login failed for {email}: {exc}", exc_info=True)
            raise InternalError() from exc

        logger.info(f"User {user.id} logged in")
        return AuthResult(token=token, user=user)

    def get_user(self, user_id: int) -> User:
        """Load a user for an authenticated request."""
        try:
            user = self.users.find_by_id(user_id)
        except SQLAlchemyError as exc:
            logger.error(f"Profile lookup failed for user {user_id}: {exc}", exc_info=True)
            raise InternalError() from exc
        if user is None:
            raise UserNotFound()
        return user

"""
Security utilities for JWT authentication and password hashing.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import base64
import hashlib
import bcrypt
from jose import JWTError, jwt
from bricksy.core.config import settings
from bricksy.core.errors import InvalidToken


@dataclass(frozen=True)
class TokenIdentity:
    """Identity decoded from a verified access token."""
    id: int
    email: str


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    The digest is base64 encoded (44 bytes) so bcrypt never sees NUL bytes.
    """
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash using bcrypt's own comparison."""
    pre_hashed = _pre_hash_password(plain_password)
    # Raises ValueError for a malformed stored hash
    return bcrypt.checkpw(pre_hashed, hashed_password.encode("utf-8"))


def get_password_hash(password: str) -> str:
    """
    Hash a password with a fresh random salt.
    Cost factor comes from BCRYPT_ROUNDS.
    """
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(pre_hashed, salt)
    return hashed.decode("utf-8")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """Create a JWT access token valid for ``expires_delta`` from ``now``."""
    to_encode = data.copy()
    issued_at = int((now or _utcnow()).timestamp())
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    to_encode.update({
        "iat": issued_at,
        "exp": issued_at + int(expires_delta.total_seconds()),
    })
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, now: Optional[datetime] = None) -> dict:
    """
    Decode and verify a JWT token.

    Expiry is checked here against ``now`` rather than by jose so that the
    validity window can be exercised with an explicit clock. Raises
    InvalidToken on a bad signature, malformed token or expiry.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError as exc:
        raise InvalidToken() from exc

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        raise InvalidToken()
    if (now or _utcnow()).timestamp() >= exp:
        raise InvalidToken("Token has expired")
    return payload


def issue_token(user, now: Optional[datetime] = None) -> str:
    """Issue an access token for a stored user."""
    return create_access_token(
        data={
            "sub": str(user.id),
            "id": user.id,
            "email": user.email,
            "nombre": user.nombre,
        },
        now=now,
    )


def verify_token(token: str, now: Optional[datetime] = None) -> TokenIdentity:
    """Verify a token and return the identity it carries."""
    payload = decode_access_token(token, now=now)
    user_id = payload.get("id")
    email = payload.get("email")
    if isinstance(user_id, bool) or not isinstance(user_id, int) or not isinstance(email, str):
        raise InvalidToken()
    return TokenIdentity(id=user_id, email=email)

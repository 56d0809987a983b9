"""
Credential store backed by the users table.
"""
import logging
from typing import Any, Mapping, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from bricksy.core.errors import DuplicateEmail
from bricksy.models.user import User

logger = logging.getLogger(__name__)

# Columns a caller may set on insert; id and created_at belong to the store
INSERTABLE_FIELDS = (
    "nombre",
    "apellidos",
    "residencia",
    "fecha_nacimiento",
    "email",
    "telefono",
    "password_hash",
)


def normalize_email(email: Optional[str]) -> str:
    """Lowercase and trim an email so it can be used as the uniqueness key."""
    return (email or "").strip().lower()


class UserRepository:
    """Reads and inserts user rows through a single SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def insert(self, fields: Mapping[str, Any]) -> User:
        """
        Insert a new user and return the stored row.

        The UNIQUE constraint on ``email`` is the source of truth for
        duplicates: a concurrent insert that slipped past any pre-check
        surfaces here as DuplicateEmail.
        """
        values = {name: fields[name] for name in INSERTABLE_FIELDS if name in fields}
        values["email"] = normalize_email(values.get("email"))

        user = User(**values)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            taken = self.db.query(User.id).filter(User.email == values["email"]).first()
            if taken is None:
                # Some other constraint failed; not a duplicate
                raise
            logger.info("Insert rejected by unique email constraint")
            raise DuplicateEmail() from exc
        self.db.refresh(user)
        return user

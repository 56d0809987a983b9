"""
User model for registration and authentication.
"""
from sqlalchemy import Column, String, Text
from bricksy.db.base import BaseModel


class User(BaseModel):
    """Registered investor. Email is stored normalized and is unique."""
    __tablename__ = "users"

    nombre = Column(Text, nullable=False, default="")
    apellidos = Column(Text, nullable=False, default="")
    residencia = Column(Text, nullable=False, default="")
    fecha_nacimiento = Column(Text, nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    telefono = Column(Text, nullable=True)
    password_hash = Column(Text, nullable=False)

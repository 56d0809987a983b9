"""
Pydantic schemas for User entity.
"""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime


class RegisterRequest(BaseModel):
    """
    Registration body.

    Email and password are optional at the schema level so that missing
    values are reported by the registration flow as MissingFields rather
    than as a generic validation failure. The aliases match field names
    older clients send.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    email: Optional[str] = None
    password: Optional[str] = None
    nombre: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("nombre", "name")
    )
    apellidos: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("apellidos", "surname", "lastName")
    )
    residencia: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("residencia", "residence")
    )
    fecha_nacimiento: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("fecha_nacimiento", "fechaNacimiento", "nacimiento"),
    )
    telefono: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("telefono", "phone")
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if v is not None else v

    @field_validator("fecha_nacimiento", "telefono")
    @classmethod
    def blank_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class LoginRequest(BaseModel):
    """Login body."""
    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if v is not None else v


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password hash."""
    id: int
    nombre: str
    apellidos: str
    residencia: str
    fecha_nacimiento: Optional[str] = None
    email: str
    telefono: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Schema for register/login response."""
    success: bool = True
    message: str
    token: str
    user: UserResponse


class MeResponse(BaseModel):
    """Schema for the current-user response."""
    success: bool = True
    user: UserResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str

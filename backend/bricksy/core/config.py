"""
Application configuration and environment settings.
"""
import os
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Bricksy"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database
    # DB_PATH is joined to DB_DIR unless it is absolute; DATABASE_URL wins when set
    DB_DIR: str = os.getenv("TMPDIR") or "/tmp"
    DB_PATH: str = "bricksy.sqlite3"
    DATABASE_URL: str = ""
    DB_ECHO: bool = False

    # JWT
    JWT_SECRET: str = "dev-secret-change"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30

    # Passwords
    MIN_PASSWORD_LENGTH: int = 6
    BCRYPT_ROUNDS: int = 10

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("ACCESS_TOKEN_EXPIRE_DAYS")
    @classmethod
    def check_token_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("ACCESS_TOKEN_EXPIRE_DAYS must be positive")
        return v

    @field_validator("MIN_PASSWORD_LENGTH")
    @classmethod
    def check_min_password_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError("MIN_PASSWORD_LENGTH must be at least 1")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def check_bcrypt_rounds(cls, v: int) -> int:
        # bcrypt only accepts log2 cost factors in this range
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @property
    def database_url(self) -> str:
        """Resolve the SQLAlchemy URL for the users store."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        path = self.DB_PATH
        if not os.path.isabs(path):
            path = os.path.join(self.DB_DIR, path)
        return f"sqlite:///{path}"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

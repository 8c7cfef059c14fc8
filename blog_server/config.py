# blog_server/config.py

"""
Environment-backed configuration.

Every component is built from one ``Settings`` instance in
``blog_server.main.create_app``; nothing reads the environment on its own.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the blog service, read from the environment and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Token signing
    secret_key: str
    jwt_algorithm: str = Field(default="HS256")

    # Database
    database_url: str = Field(default="sqlite:///./data/blog.db")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=4000)
    cors_origins: list[str] = Field(default=["http://localhost:3000"])
    log_level: str = Field(default="INFO")

    # Uploads
    upload_dir: str = Field(default="uploads")
    use_in_memory_storage: bool = Field(default=False)

    # Auth
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)
    cookie_name: str = Field(default="token")
    cookie_secure: bool = Field(default=False)
    cookie_samesite: str = Field(default="lax", pattern="^(lax|strict|none)$")

    # Posts
    post_list_limit: int = Field(default=20, ge=1)
    require_author_for_delete: bool = Field(default=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()

# blog_server/dependencies.py

"""
Dependency wiring for the FastAPI app.

Components are built once by ``create_app`` and kept on ``app.state``;
these getters hand them to route handlers.
"""

from fastapi import Depends, Request

from blog_server.config import Settings
from blog_server.core.security import PasswordHasher, TokenService
from blog_server.core.storage import UploadStorage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_storage(request: Request) -> UploadStorage:
    return request.app.state.storage


def get_session_token(request: Request) -> str | None:
    settings = get_app_settings(request)
    return request.cookies.get(settings.cookie_name)


def get_current_user(
    token: str | None = Depends(get_session_token),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    """
    Claims of the session cookie. Raises Unauthorized when it is missing or invalid.
    """
    return tokens.verify(token)

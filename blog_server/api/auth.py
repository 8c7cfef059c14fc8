# blog_server/api/auth.py

from pydantic import BaseModel, Field
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from blog_server.config import Settings
from blog_server.core.security import PasswordHasher, TokenService
from blog_server.core.users import authenticate_user, register_user
from blog_server.database import get_db
from blog_server.dependencies import (
    get_app_settings,
    get_current_user,
    get_password_hasher,
    get_token_service,
)


router = APIRouter()


class Credentials(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class User(BaseModel):
    id: str
    username: str


@router.post("/register", response_model=User)
def register(
    credentials: Credentials,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    new_user = register_user(db, hasher, credentials.username, credentials.password)
    return User(id=new_user.id, username=new_user.username)


@router.post("/login", response_model=User)
def login(
    credentials: Credentials,
    response: Response,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_app_settings),
):
    user = authenticate_user(db, hasher, credentials.username, credentials.password)
    response.set_cookie(
        key=settings.cookie_name,
        value=tokens.issue(user.username, user.id),
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )
    return User(id=user.id, username=user.username)


@router.get("/profile")
def profile(claims: dict = Depends(get_current_user)):
    return claims


@router.post("/logout")
def logout(response: Response, settings: Settings = Depends(get_app_settings)):
    response.delete_cookie(
        key=settings.cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )
    return "ok"

# blog_server/core/users.py

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_server.core.errors import (
    DuplicateUser,
    InvalidCredentials,
    UserNotFound,
    ValidationError,
)
from blog_server.core.security import PasswordHasher
from blog_server.models.user import User


logger = logging.getLogger(__name__)


def register_user(db: Session, hasher: PasswordHasher, username: str, password: str) -> User:
    """
    Creates a user with a hashed password.
    Raises DuplicateUser if the username is already taken.
    """
    username = (username or "").strip()
    if not username or not password:
        raise ValidationError("Username and password are required")

    user_exists = db.query(User).filter(User.username == username).first()
    if user_exists:
        raise DuplicateUser()

    new_user = User(username=username, hashed_password=hasher.hash(password))
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent registration
        db.rollback()
        raise DuplicateUser()
    db.refresh(new_user)

    logger.info("Registered user %s", username)
    return new_user


def authenticate_user(db: Session, hasher: PasswordHasher, username: str, password: str) -> User:
    """
    Returns the user whose credentials match.
    Raises UserNotFound or InvalidCredentials otherwise.
    """
    user = db.query(User).filter(User.username == (username or "").strip()).first()
    if not user:
        logger.info("Login failed for unknown user %s", username)
        raise UserNotFound()
    if not hasher.verify(password, user.hashed_password):
        logger.info("Login failed for user %s: wrong password", username)
        raise InvalidCredentials()

    logger.info("User %s logged in", user.username)
    return user

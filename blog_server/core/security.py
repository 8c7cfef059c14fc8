# blog_server/core/security.py

import logging
import time

from jose import JWTError, jwt
from passlib.context import CryptContext

from blog_server.core.errors import Unauthorized


logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Salted bcrypt hashing with a fixed work factor.
    """

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        if not plain_password or not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except ValueError:
            # stored value is not a hash this context understands
            logger.warning("Unrecognized password hash format")
            return False


class TokenService:
    """
    Issues and verifies signed session tokens.

    Tokens carry ``username``, ``id`` and ``iat`` and never expire; they are
    valid for as long as the signing secret stays the same.
    """

    REQUIRED_CLAIMS = ("username", "id")

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm

    def issue(self, username: str, user_id: str) -> str:
        claims = {"username": username, "id": user_id, "iat": int(time.time())}
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str | None) -> dict:
        if not token:
            raise Unauthorized("No token provided")
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError:
            raise Unauthorized("Invalid token")

        if any(not payload.get(claim) for claim in self.REQUIRED_CLAIMS):
            raise Unauthorized("Invalid token")
        return payload

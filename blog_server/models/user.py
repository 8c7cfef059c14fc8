# blog_server/models/user.py

import uuid

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from . import Base


def new_id() -> str:
    return uuid.uuid4().hex


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for blog authors.
    Stores username and hashed password for authentication.
    """
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    posts = relationship("Post", back_populates="author")

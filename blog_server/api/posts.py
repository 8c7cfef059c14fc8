# blog_server/api/posts.py

from datetime import datetime

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from blog_server.config import Settings
from blog_server.core.errors import ValidationError
from blog_server.core.posts import PostStore, discard_cover
from blog_server.core.security import TokenService
from blog_server.core.storage import UploadStorage
from blog_server.core.uploads import staged_upload
from blog_server.database import get_db
from blog_server.dependencies import (
    get_app_settings,
    get_current_user,
    get_session_token,
    get_storage,
    get_token_service,
)


router = APIRouter()


# -------------------------------
# Response Schemas
# -------------------------------

class Author(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str


class PostOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    summary: str
    content: str
    cover: str
    author: Author
    created_at: datetime
    updated_at: datetime


# -------------------------------
# Post Endpoints
# -------------------------------

@router.post("/post", response_model=PostOut)
def create_post(
    title: str = Form(...),
    summary: str = Form(...),
    content: str = Form(...),
    file: UploadFile | None = File(None),
    claims: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: UploadStorage = Depends(get_storage),
):
    """
    Creates a post with the uploaded cover image.
    The stored image is removed again if the post cannot be created.
    """
    if file is None or not file.filename:
        raise ValidationError("No file found")

    with staged_upload(storage, file) as cover:
        post = PostStore(db).create(title, summary, content, cover, claims["id"])
    return PostOut.model_validate(post)


@router.put("/post", response_model=PostOut)
def update_post(
    post_id: str = Form(..., alias="id"),
    title: str = Form(...),
    summary: str = Form(...),
    content: str = Form(...),
    file: UploadFile | None = File(None),
    claims: dict = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: UploadStorage = Depends(get_storage),
):
    """
    Updates a post owned by the caller. Without a new file the cover is kept;
    a replaced cover is removed from storage.
    """
    if file is not None and not file.filename:
        file = None

    store = PostStore(db)
    with staged_upload(storage, file) as cover:
        previous_cover = store.get(post_id).cover
        post = store.update(post_id, claims["id"], title, summary, content, cover)

    if cover and previous_cover != cover:
        discard_cover(storage, previous_cover)
    return PostOut.model_validate(post)


@router.get("/post", response_model=list[PostOut])
def list_posts(
    limit: int | None = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    posts = PostStore(db).list_recent(limit or settings.post_list_limit)
    return [PostOut.model_validate(post) for post in posts]


@router.get("/post/{post_id}", response_model=PostOut)
def get_post(post_id: str, db: Session = Depends(get_db)):
    return PostOut.model_validate(PostStore(db).get(post_id))


@router.delete("/post/{post_id}")
def delete_post(
    post_id: str,
    token: str | None = Depends(get_session_token),
    db: Session = Depends(get_db),
    storage: UploadStorage = Depends(get_storage),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_app_settings),
):
    """
    Deletes a post and its cover image.
    Only checks authorship when require_author_for_delete is enabled.
    """
    author_id = None
    if settings.require_author_for_delete:
        author_id = tokens.verify(token)["id"]

    cover = PostStore(db).delete(post_id, author_id=author_id)
    discard_cover(storage, cover)
    return {"message": "Post deleted successfully"}

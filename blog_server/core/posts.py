# blog_server/core/posts.py

import logging

from sqlalchemy.orm import Session

from blog_server.core.errors import Forbidden, NotFound, Unauthorized
from blog_server.core.storage import UploadStorage
from blog_server.models.post import Post
from blog_server.models.user import User


logger = logging.getLogger(__name__)


class PostStore:
    """
    Post persistence on top of one request-scoped ORM session.
    Authors are loaded with every post, so results can be serialized as-is.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, title: str, summary: str, content: str, cover: str, author_id: str) -> Post:
        if self.db.get(User, author_id) is None:
            raise Unauthorized("Unknown author")

        post = Post(
            title=title,
            summary=summary,
            content=content,
            cover=cover,
            author_id=author_id,
        )
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        logger.info("Created post %s by %s", post.id, author_id)
        return post

    def get(self, post_id: str) -> Post:
        post = self.db.get(Post, post_id)
        if post is None:
            raise NotFound("Post not found")
        return post

    def list_recent(self, limit: int) -> list[Post]:
        return (
            self.db.query(Post)
            .order_by(Post.created_at.desc())
            .limit(limit)
            .all()
        )

    def update(
        self,
        post_id: str,
        author_id: str,
        title: str,
        summary: str,
        content: str,
        cover: str | None = None,
    ) -> Post:
        """
        Replaces title, summary and content, and the cover when a new one was
        uploaded. Only the author may update a post.
        """
        post = self.get(post_id)
        if post.author_id != author_id:
            logger.info("Rejected update of post %s by non-author %s", post_id, author_id)
            raise Forbidden()

        post.title = title
        post.summary = summary
        post.content = content
        if cover:
            post.cover = cover
        self.db.commit()
        self.db.refresh(post)
        logger.info("Updated post %s", post_id)
        return post

    def delete(self, post_id: str, author_id: str | None = None) -> str:
        """
        Removes a post and returns the storage path of its cover.
        The author is only checked when ``author_id`` is given.
        """
        post = self.get(post_id)
        if author_id is not None and post.author_id != author_id:
            raise Forbidden()

        cover = post.cover
        self.db.delete(post)
        self.db.commit()
        logger.info("Deleted post %s", post_id)
        return cover


def discard_cover(storage: UploadStorage, cover: str):
    try:
        storage.delete(cover)
    except FileNotFoundError:
        logger.warning("Cover %s was already gone", cover)
    except OSError:
        # the post is already gone, a leftover file must not fail the request
        logger.exception("Could not remove cover %s", cover)

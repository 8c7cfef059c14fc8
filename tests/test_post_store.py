from datetime import datetime, timedelta

import pytest

from blog_server.core.errors import Forbidden, NotFound, Unauthorized
from blog_server.core.posts import PostStore, discard_cover
from blog_server.core.storage import InMemoryUploadStorage
from blog_server.models import Post, User


@pytest.fixture()
def authors(db_session):
    alice = User(username="alice", hashed_password="x")
    bob = User(username="bob", hashed_password="x")
    db_session.add_all([alice, bob])
    db_session.commit()
    return alice, bob


@pytest.fixture()
def store(db_session):
    return PostStore(db_session)


def test_create_resolves_author(store, authors):
    alice, _ = authors
    post = store.create("T", "S", "C", "uploads/a.png", alice.id)

    assert post.id
    assert post.author.username == "alice"
    assert post.created_at is not None
    assert post.updated_at is not None


def test_create_requires_existing_author(store):
    with pytest.raises(Unauthorized):
        store.create("T", "S", "C", "uploads/a.png", "missing")


def test_list_recent_orders_by_creation_desc(store, authors, db_session):
    alice, _ = authors
    base = datetime(2024, 1, 1)
    for offset in (2, 0, 1):
        post = store.create(f"post {offset}", "S", "C", "uploads/a.png", alice.id)
        post.created_at = base + timedelta(days=offset)
    db_session.commit()

    titles = [post.title for post in store.list_recent(limit=10)]
    assert titles == ["post 2", "post 1", "post 0"]
    assert len(store.list_recent(limit=2)) == 2


def test_get_missing(store):
    with pytest.raises(NotFound):
        store.get("missing")


def test_update_by_author(store, authors):
    alice, _ = authors
    post = store.create("T", "S", "C", "uploads/a.png", alice.id)

    updated = store.update(post.id, alice.id, "T2", "S2", "C2")
    assert (updated.title, updated.summary, updated.content) == ("T2", "S2", "C2")
    assert updated.cover == "uploads/a.png"

    updated = store.update(post.id, alice.id, "T3", "S3", "C3", cover="uploads/b.png")
    assert updated.cover == "uploads/b.png"


def test_update_by_other_user_is_refused(store, authors, db_session):
    alice, bob = authors
    post = store.create("T", "S", "C", "uploads/a.png", alice.id)

    with pytest.raises(Forbidden):
        store.update(post.id, bob.id, "X", "X", "X", cover="uploads/x.png")

    db_session.expire_all()
    stored = db_session.get(Post, post.id)
    assert (stored.title, stored.cover) == ("T", "uploads/a.png")


def test_update_missing(store, authors):
    alice, _ = authors
    with pytest.raises(NotFound):
        store.update("missing", alice.id, "T", "S", "C")


def test_delete_returns_cover(store, authors):
    alice, _ = authors
    post = store.create("T", "S", "C", "uploads/a.png", alice.id)
    post_id = post.id

    assert store.delete(post_id) == "uploads/a.png"
    with pytest.raises(NotFound):
        store.get(post_id)
    with pytest.raises(NotFound):
        store.delete(post_id)


def test_delete_with_author_check(store, authors):
    alice, bob = authors
    post = store.create("T", "S", "C", "uploads/a.png", alice.id)

    with pytest.raises(Forbidden):
        store.delete(post.id, author_id=bob.id)
    assert store.delete(post.id, author_id=alice.id) == "uploads/a.png"


def test_discard_cover_removes_file():
    storage = InMemoryUploadStorage()
    path = storage.save(b"x", ".png")

    discard_cover(storage, path)
    assert storage.stored_objects == {}


def test_discard_cover_tolerates_storage_failures():
    class ReadOnlyStorage(InMemoryUploadStorage):
        def delete(self, path):
            raise PermissionError(path)

    discard_cover(InMemoryUploadStorage(), "uploads/missing.png")
    discard_cover(ReadOnlyStorage(), "uploads/a.png")

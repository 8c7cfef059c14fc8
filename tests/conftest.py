from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from blog_server.config import Settings
from blog_server.database import build_engine, build_session_factory, init_db
from blog_server.main import create_app


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        secret_key="test-secret",
        database_url="sqlite://",
        upload_dir=str(tmp_path / "uploads"),
        bcrypt_rounds=4,
    )


@pytest.fixture()
def upload_dir(settings: Settings) -> Path:
    return Path(settings.upload_dir)


@pytest.fixture()
def client(settings: Settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture()
def db_session():
    """
    A session on a fresh in-memory database, for tests below the HTTP layer.
    """
    engine = build_engine("sqlite://")
    init_db(engine)
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def login_as(client: TestClient, username: str, password: str = "secret-pw") -> dict:
    """
    Registers the user if needed and logs in; the client keeps the cookie.
    """
    client.post("/register", json={"username": username, "password": password})
    response = client.post("/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def create_post(
    client: TestClient,
    title: str = "Hello",
    summary: str = "A first post",
    content: str = "<p>Body</p>",
    file=("cover.png", PNG_BYTES, "image/png"),
):
    files = {"file": file} if file is not None else None
    return client.post(
        "/post",
        data={"title": title, "summary": summary, "content": content},
        files=files,
    )

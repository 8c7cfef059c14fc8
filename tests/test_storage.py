import pytest

from blog_server.core.storage import InMemoryUploadStorage, LocalUploadStorage


@pytest.fixture(params=["local", "memory"])
def storage(request, tmp_path):
    if request.param == "local":
        return LocalUploadStorage(tmp_path / "uploads")
    return InMemoryUploadStorage()


def test_save_load_delete(storage):
    path = storage.save(b"bytes", ".png")

    assert path.startswith("uploads/") and path.endswith(".png")
    assert storage.load(path) == b"bytes"

    storage.delete(path)
    with pytest.raises(FileNotFoundError):
        storage.load(path)
    with pytest.raises(FileNotFoundError):
        storage.delete(path)


def test_names_do_not_collide(storage):
    paths = {storage.save(b"x", ".gif") for _ in range(20)}
    assert len(paths) == 20


@pytest.mark.parametrize("path", ["uploads/../secret", "uploads/a/b.png", "uploads/", "uploads/.."])
def test_rejects_paths_outside_upload_dir(storage, path):
    with pytest.raises(FileNotFoundError):
        storage.load(path)


def test_local_storage_writes_into_root(tmp_path):
    storage = LocalUploadStorage(tmp_path / "covers")
    path = storage.save(b"data", ".jpg")

    name = path.split("/", 1)[1]
    assert (tmp_path / "covers" / name).read_bytes() == b"data"

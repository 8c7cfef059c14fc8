# blog_server/api/uploads.py

import mimetypes

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from blog_server.core.errors import NotFound
from blog_server.core.storage import URL_PREFIX, UploadStorage
from blog_server.dependencies import get_storage


router = APIRouter()


@router.get(f"/{URL_PREFIX}/{{name}}")
def view_upload(name: str, storage: UploadStorage = Depends(get_storage)):
    """
    Serves a stored cover image. Raises a 404 error if it does not exist.
    """
    try:
        data = storage.load(f"{URL_PREFIX}/{name}")
    except FileNotFoundError:
        raise NotFound("File not found")

    media_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
    return Response(content=data, media_type=media_type)

# blog_server/main.py

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from blog_server.api import auth, posts, uploads
from blog_server.config import Settings, get_settings
from blog_server.core.errors import BlogError, InternalError
from blog_server.core.security import PasswordHasher, TokenService
from blog_server.core.storage import InMemoryUploadStorage, LocalUploadStorage
from blog_server.database import build_engine, build_session_factory, init_db


logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message}
    )


async def handle_blog_error(request: Request, exc: BlogError):
    return _error_response(exc.status_code, str(exc))


async def handle_validation_error(request: Request, exc: RequestValidationError):
    fields = ", ".join(
        ".".join(str(part) for part in error["loc"][1:]) or error["loc"][0]
        for error in exc.errors()
    )
    return _error_response(400, f"Invalid request: {fields}")


async def handle_internal_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(InternalError.status_code, InternalError.message)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    engine = build_engine(settings.database_url)
    init_db(engine)

    app = FastAPI(title="Blog Backend", version="0.1.0")

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_service = TokenService(settings.secret_key, settings.jwt_algorithm)
    if settings.use_in_memory_storage:
        app.state.storage = InMemoryUploadStorage()
    else:
        app.state.storage = LocalUploadStorage(settings.upload_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BlogError, handle_blog_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_internal_error)
    app.add_exception_handler(OSError, handle_internal_error)
    app.add_exception_handler(Exception, handle_internal_error)

    app.include_router(auth.router)
    app.include_router(posts.router)
    app.include_router(uploads.router)
    return app


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server starting on port %s", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()

# blog_server/core/errors.py

"""
Errors raised by the blog services.

Each error carries the HTTP status it is reported with; ``blog_server.main``
turns them into ``{"status": "error", "message": ...}`` responses.
"""


class BlogError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class ValidationError(BlogError):
    status_code = 400
    message = "Invalid request"


class DuplicateUser(BlogError):
    status_code = 400
    message = "Username already exists"


class NotFound(BlogError):
    status_code = 404
    message = "Not found"


class UserNotFound(NotFound):
    # login reports unknown users the same way as bad passwords
    status_code = 400
    message = "User not found"


class InvalidCredentials(BlogError):
    status_code = 400
    message = "Wrong credentials"


class Unauthorized(BlogError):
    status_code = 401
    message = "Unauthorized"


class Forbidden(BlogError):
    status_code = 400
    message = "You are not the author"


class UnsupportedMediaType(BlogError):
    status_code = 400
    message = "Unsupported file type"


class InternalError(BlogError):
    status_code = 500

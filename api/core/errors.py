"""
Errors raised by the upload/delete workflows and the stores beneath them.

Each error carries the HTTP status and the client-facing message; `main.py`
renders them as `{"error": message}`.
"""

from __future__ import annotations


class MediaError(RuntimeError):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(MediaError):
    status_code = 400
    default_message = "Bad request"


class UnsupportedMediaTypeError(MediaError):
    # Kept as a 400 so existing clients see the same status as before.
    status_code = 400
    default_message = "Only JPG, PNG, or WEBP files allowed"


class PayloadTooLargeError(MediaError):
    status_code = 413
    default_message = "File too large"


class RecordNotFoundError(MediaError):
    status_code = 404
    default_message = "Record not found"


class DatabaseError(MediaError):
    status_code = 500
    default_message = "Database error"

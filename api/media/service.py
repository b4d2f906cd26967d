"""
Upload helpers shared by the banner and project endpoints.

This file is independent of FastAPI's routing layer:
- Validate required multipart fields
- Read file bytes with a size limit
- Parse record ids from the URL path
"""

from __future__ import annotations

from fastapi import UploadFile

from core.db import is_serial_id
from core.errors import BadRequestError, PayloadTooLargeError


def clean_field(value: str | None) -> str | None:
    """
    Strip a text form field; blank counts as missing.
    """
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_upload(
    file: UploadFile | None,
    fields: dict[str, str | None],
    *,
    message: str,
) -> dict[str, str]:
    """
    Raise `BadRequestError(message)` if the file or any field is missing.

    Returns the cleaned fields.
    """
    cleaned = {name: clean_field(value) for name, value in fields.items()}
    if file is None or any(value is None for value in cleaned.values()):
        raise BadRequestError(message)
    return {name: value for name, value in cleaned.items() if value is not None}


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read the upload into memory, enforcing a maximum size.
    """
    chunk_size = 1024 * 1024  # 1 MiB
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise PayloadTooLargeError(f"File too large. Max is {max_bytes} bytes.")

    return bytes(buf)


def parse_record_id(raw: str | int) -> int | None:
    """
    Turn a path id into an int the id column can hold, or None.

    Non-numeric and out-of-range ids can never match a row, so callers treat
    them as not found instead of sending them to the database.
    """
    if isinstance(raw, int):
        value = raw
    else:
        raw = raw.strip()
        if not raw.isdigit():
            return None
        value = int(raw)
    return value if is_serial_id(value) else None

"""
Upload and delete workflows shared by every resource kind.

There is no transaction spanning the blob directory and the database, so the
two stores are kept consistent by ordering:

Upload:  validate -> write blob -> insert record -> (on failure) delete blob
Delete:  find record -> delete blob (best-effort) -> delete record

A record delete can still fail after its blob is gone; that state is left as
is and reported as a database error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from fastapi import UploadFile

from core import settings
from core.errors import DatabaseError, RecordNotFoundError
from core.storage import BlobStore, StoredBlob

from . import service

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    """
    One table of records that each point at a blob through `file_url`.
    """

    async def insert(self, *, file_url: str, **fields: Any) -> int: ...

    async def list_all(self) -> list[dict[str, Any]]: ...

    async def find_by_id(self, record_id: int) -> dict[str, Any] | None: ...

    async def delete_by_id(self, record_id: int) -> None: ...


@dataclass(frozen=True)
class UploadResult:
    id: int
    file_url: str
    blob_name: str
    fields: dict[str, str]


class UploadWorkflow:
    def __init__(
        self,
        blob_store: BlobStore,
        records: RecordStore,
        *,
        required_fields: tuple[str, ...] = (),
        missing_message: str = "No file uploaded",
        max_bytes: int | None = None,
    ) -> None:
        self._blobs = blob_store
        self._records = records
        self._required_fields = required_fields
        self._missing_message = missing_message
        self._max_bytes = settings.max_upload_bytes() if max_bytes is None else max_bytes

    async def upload(self, file: UploadFile | None, **fields: str | None) -> UploadResult:
        """
        Store `file` and insert a record pointing at it.

        Validation errors are raised before anything is written. If the insert
        fails the blob is removed again before the error propagates.
        """
        expected = {name: fields.get(name) for name in self._required_fields}
        cleaned = service.require_upload(file, expected, message=self._missing_message)

        self._blobs.check_content_type(file.content_type)
        data = await service.read_upload_bytes(file, self._max_bytes)
        blob = self._blobs.store(data, file.filename or "", file.content_type)

        try:
            record_id = await self._records.insert(file_url=blob.url, **cleaned)
        except DatabaseError:
            self._rollback(blob)
            raise
        except Exception as exc:
            self._rollback(blob)
            raise DatabaseError() from exc
        except BaseException:
            # Cancellation mid-insert must not leave the file behind either.
            self._rollback(blob)
            raise

        logger.info(
            "upload_recorded id=%s name=%s size_bytes=%s", record_id, blob.name, blob.size_bytes
        )
        return UploadResult(id=record_id, file_url=blob.url, blob_name=blob.name, fields=cleaned)

    def _rollback(self, blob: StoredBlob) -> None:
        logger.warning("upload_rollback name=%s", blob.name)
        if not self._blobs.delete(blob.name):
            # The insert error is what the caller sees; this one is only logged.
            logger.error("upload_rollback_failed name=%s path=%s", blob.name, blob.path)


class DeleteWorkflow:
    def __init__(
        self,
        blob_store: BlobStore,
        records: RecordStore,
        *,
        not_found_message: str = "Record not found",
    ) -> None:
        self._blobs = blob_store
        self._records = records
        self._not_found_message = not_found_message

    async def delete(self, raw_id: str | int) -> None:
        record_id = service.parse_record_id(raw_id)
        row = await self._records.find_by_id(record_id) if record_id is not None else None
        if record_id is None or row is None:
            raise RecordNotFoundError(self._not_found_message)

        blob_name = self._blobs.name_from_url(str(row["file_url"]))
        if not self._blobs.delete(blob_name):
            logger.warning("record_delete_blob_kept id=%s name=%s", record_id, blob_name)

        await self._records.delete_by_id(record_id)

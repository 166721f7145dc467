"""
Grade store lifecycle.

Loads the user's grades once at startup and writes them back after every
change. Storage problems never reach the caller:

- An absent, unreadable or malformed blob loads as an empty store.
- A failed write is logged; the in-memory store stays authoritative for
  the rest of the session.
"""

import json
import logging

from cardranker.models.grade_store import GradeStore
from cardranker.services.blob_store import BlobStore, BlobStoreError

logger = logging.getLogger(__name__)


class StoreParseError(Exception):
    """The persisted grade blob could not be read or parsed."""

    pass


class StorePersistError(Exception):
    """The grade store could not be written back."""

    pass


def parse_grade_blob(blob: str) -> GradeStore:
    """
    Parse a persisted grade blob.

    Raises:
        StoreParseError: If the blob is not a JSON object of strings
    """
    try:
        payload = json.loads(blob)
    except json.JSONDecodeError as e:
        raise StoreParseError(f"Grade blob is not valid JSON: {e.msg}") from e

    if not isinstance(payload, dict):
        raise StoreParseError(f"Grade blob is a {type(payload).__name__}, not an object")
    if not all(isinstance(grade, str) for grade in payload.values()):
        raise StoreParseError("Grade blob contains non-string grades")

    return GradeStore(grades=dict(payload))


def serialize_grade_store(grade_store: GradeStore) -> str:
    return json.dumps(grade_store.grades, sort_keys=True, ensure_ascii=False)


class GradeStoreRepository:
    """Reads and writes one set's grades in a blob store."""

    def __init__(self, blob_store: BlobStore, storage_key: str) -> None:
        self.blob_store = blob_store
        self.storage_key = storage_key

    async def _read(self) -> GradeStore:
        try:
            blob = await self.blob_store.get(self.storage_key)
        except BlobStoreError as e:
            raise StoreParseError(str(e)) from e

        if blob is None:
            return GradeStore()
        return parse_grade_blob(blob)

    async def _write(self, grade_store: GradeStore) -> None:
        try:
            await self.blob_store.put(self.storage_key, serialize_grade_store(grade_store))
        except BlobStoreError as e:
            raise StorePersistError(str(e)) from e

    async def load(self) -> GradeStore:
        """
        Load the persisted grades.

        Returns an empty store when nothing is persisted or the blob
        cannot be parsed.
        """
        try:
            grade_store = await self._read()
        except StoreParseError:
            logger.warning(
                "grade_store_load_failed",
                extra={"storage_key": self.storage_key},
                exc_info=True,
            )
            return GradeStore()

        logger.info(
            "grade_store_loaded",
            extra={"storage_key": self.storage_key, "graded": len(grade_store)},
        )
        return grade_store

    async def save(self, grade_store: GradeStore) -> bool:
        """
        Persist the grades.

        Returns:
            True if written, False if the write failed (already logged).
        """
        try:
            await self._write(grade_store)
        except StorePersistError:
            logger.error(
                "grade_store_save_failed",
                extra={"storage_key": self.storage_key, "graded": len(grade_store)},
                exc_info=True,
            )
            return False
        return True

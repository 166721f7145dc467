"""
Key-value text blob storage.

The grade repository only needs "read the blob under this key" and
"replace the blob under this key". Production uses the database; tests
and scripts can use the in-memory store.
"""

from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cardranker.models.db import StoredBlobDB


class BlobStoreError(Exception):
    """Raised when the backing storage cannot be read or written."""

    pass


class BlobStore(Protocol):
    """Opaque text storage keyed by string."""

    async def get(self, key: str) -> str | None:
        """Return the blob under `key`, or None if there is none."""
        ...

    async def put(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous blob."""
        ...


class MemoryBlobStore:
    """Blob store kept in a dict. Contents are lost with the process."""

    def __init__(self, blobs: dict[str, str] | None = None) -> None:
        self.blobs: dict[str, str] = dict(blobs or {})

    async def get(self, key: str) -> str | None:
        return self.blobs.get(key)

    async def put(self, key: str, value: str) -> None:
        self.blobs[key] = value


class SqlBlobStore:
    """
    Blob store backed by the `blobs` table.

    Each call runs in its own session and commits before returning.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> str | None:
        try:
            async with self._session_factory() as session:
                row = await session.get(StoredBlobDB, key)
                return row.value if row is not None else None
        except SQLAlchemyError as e:
            raise BlobStoreError(f"Failed to read blob '{key}'") from e

    async def put(self, key: str, value: str) -> None:
        try:
            async with self._session_factory() as session:
                row = await session.get(StoredBlobDB, key)
                if row is None:
                    session.add(StoredBlobDB(key=key, value=value))
                else:
                    row.value = value
                await session.commit()
        except SQLAlchemyError as e:
            raise BlobStoreError(f"Failed to write blob '{key}'") from e

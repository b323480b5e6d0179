"""Document store addressed by hierarchical collection paths."""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Protocol

import aiosqlite

from .errors import StoreWriteError

logger = logging.getLogger(__name__)

DocumentPayload = dict[str, Any]
StoredDocument = tuple[str, DocumentPayload]


class DocumentStore(Protocol):
    """Minimal collection store used by task and theme submission."""

    async def create(self, path: str, payload: DocumentPayload) -> str:
        """Add ``payload`` to the collection at ``path`` and return its new id."""
        ...

    async def list(self, path: str) -> list[StoredDocument]:
        """Return ``(id, payload)`` pairs for every document in ``path``."""
        ...


def _normalize_path(path: str) -> str:
    trimmed = path.strip().strip("/")
    if not trimmed:
        raise ValueError("Collection path must not be empty")
    segments = trimmed.split("/")
    if any(segment in ("", ".", "..") for segment in segments):
        raise ValueError(f"Invalid collection path: {path!r}")
    return "/".join(segments)


class SQLiteDocumentStore:
    """Persist documents as JSON rows keyed by collection path."""

    def __init__(self, database_path: Path):
        self._path = database_path
        self._connection: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Open the SQLite connection and ensure tables exist."""

        if self._connection is not None:
            return

        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._path)
        self._connection.row_factory = aiosqlite.Row
        await self._connection.execute("PRAGMA journal_mode=WAL;")
        await self._create_schema()
        logger.info("Document store ready at %s", self._path)

    async def _create_schema(self) -> None:
        assert self._connection is not None
        await self._connection.executescript(
            """
            CREATE TABLE IF NOT EXISTS documents (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                collection_path TEXT NOT NULL,
                doc_id TEXT NOT NULL,
                data TEXT NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                UNIQUE(collection_path, doc_id)
            );

            CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents(collection_path);
            """
        )
        await self._connection.commit()

    async def close(self) -> None:
        if self._connection is not None:
            await self._connection.close()
            self._connection = None

    async def create(self, path: str, payload: DocumentPayload) -> str:
        """Insert a document and return the identifier assigned to it."""

        if self._connection is None:
            raise StoreWriteError("Document store is not initialized")

        try:
            collection = _normalize_path(path)
        except ValueError as exc:
            raise StoreWriteError(str(exc)) from exc
        doc_id = uuid.uuid4().hex
        body = {key: value for key, value in payload.items() if key != "id"}
        try:
            await self._connection.execute(
                "INSERT INTO documents(collection_path, doc_id, data) VALUES (?, ?, ?)",
                (collection, doc_id, json.dumps(body)),
            )
            await self._connection.commit()
        except (aiosqlite.Error, TypeError, ValueError) as exc:
            raise StoreWriteError(f"Failed to write document to {collection}: {exc}") from exc

        logger.debug("Created document %s in %s", doc_id, collection)
        return doc_id

    async def list(self, path: str) -> list[StoredDocument]:
        """Return documents of one collection in insertion order."""

        assert self._connection is not None
        collection = _normalize_path(path)
        cursor = await self._connection.execute(
            """
            SELECT doc_id, data
            FROM documents
            WHERE collection_path = ?
            ORDER BY id ASC
            """,
            (collection,),
        )
        rows = await cursor.fetchall()
        await cursor.close()

        documents: list[StoredDocument] = []
        for row in rows:
            try:
                data = json.loads(row["data"])
            except json.JSONDecodeError:
                logger.warning("Skipping unreadable document %s in %s", row["doc_id"], collection)
                continue
            if isinstance(data, dict):
                documents.append((row["doc_id"], data))
        return documents


__all__ = ["DocumentStore", "DocumentPayload", "StoredDocument", "SQLiteDocumentStore"]

from __future__ import annotations

import pathlib
import sys
from typing import Any

import anyio
import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


class FakeDocumentStore:
    """In-memory document store that records every call."""

    def __init__(self, *, fail_writes: bool = False) -> None:
        self.fail_writes = fail_writes
        self.collections: dict[str, list[tuple[str, dict[str, Any]]]] = {}
        self.create_calls: list[tuple[str, dict[str, Any]]] = []
        self._counter = 0

    async def create(self, path: str, payload: dict[str, Any]) -> str:
        self.create_calls.append((path, dict(payload)))
        if self.fail_writes:
            raise RuntimeError("store unavailable")
        self._counter += 1
        doc_id = f"doc-{self._counter}"
        self.collections.setdefault(path, []).append((doc_id, dict(payload)))
        return doc_id

    async def list(self, path: str) -> list[tuple[str, dict[str, Any]]]:
        return list(self.collections.get(path, []))


class GatedDocumentStore(FakeDocumentStore):
    """Fake store whose writes wait until the test releases them."""

    def __init__(self) -> None:
        super().__init__()
        self.entered = anyio.Event()
        self.release = anyio.Event()

    async def create(self, path: str, payload: dict[str, Any]) -> str:
        self.entered.set()
        await self.release.wait()
        return await super().create(path, payload)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fake_store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def failing_store() -> FakeDocumentStore:
    return FakeDocumentStore(fail_writes=True)


@pytest.fixture
async def gated_store() -> GatedDocumentStore:
    return GatedDocumentStore()

"""Service keeping one task draft and one add-theme flow per editing session."""

from __future__ import annotations

import asyncio
import datetime
import logging
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable, Optional

from ..store import DocumentStore
from ..tasks.draft import Clock, TaskDraftController
from ..tasks.models import DEFAULT_CUSTOM_WINDOW_DAYS, AccountContext, Task, Theme
from ..tasks.submission import submit_task
from ..tasks.themes import ThemeCreationFlow
from ..utils.datetime_utils import utcnow

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = datetime.timedelta(hours=1)


@dataclass(slots=True)
class DraftSession:
    """State owned by one editing session."""

    session_id: str
    account: Optional[AccountContext]
    controller: TaskDraftController
    last_active_at: datetime.datetime
    theme_flow: ThemeCreationFlow = field(default_factory=ThemeCreationFlow)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    closed: bool = False

    @property
    def draft(self) -> Task:
        return self.controller.draft


class DraftSessionService:
    """Open, edit and submit task drafts.

    Each session carries the account context it was opened with. Edits and
    submissions on the same session are serialized by the session lock, so a
    draft is never changed while its submission is in flight, and an edit
    queued behind a successful submission is rejected instead of applied.
    Sessions idle for longer than ``session_ttl`` are discarded.
    """

    def __init__(
        self,
        store: DocumentStore,
        *,
        window_days: int = DEFAULT_CUSTOM_WINDOW_DAYS,
        session_ttl: datetime.timedelta = DEFAULT_SESSION_TTL,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._window_days = window_days
        self._session_ttl = session_ttl
        self._clock = clock
        self._lock = asyncio.Lock()
        self._sessions: dict[str, DraftSession] = {}

    def _is_expired(self, session: DraftSession, now: datetime.datetime) -> bool:
        return now - session.last_active_at > self._session_ttl

    def _prune_expired(self, now: datetime.datetime) -> None:
        # Caller holds self._lock.
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if self._is_expired(session, now)
        ]
        for session_id in expired:
            self._sessions.pop(session_id).closed = True
        if expired:
            logger.info("Discarded %d expired draft session(s)", len(expired))

    async def open_session(
        self,
        account: Optional[AccountContext],
        theme: Optional[str] = None,
    ) -> DraftSession:
        """Start a new editing session, optionally pre-selecting ``theme``."""

        now = self._clock()
        session = DraftSession(
            session_id=uuid.uuid4().hex,
            account=account,
            controller=TaskDraftController(
                theme,
                clock=self._clock,
                window_days=self._window_days,
            ),
            last_active_at=now,
        )
        async with self._lock:
            self._prune_expired(now)
            self._sessions[session.session_id] = session
        logger.debug(
            "Opened draft session %s account=%s theme=%s",
            session.session_id,
            account.id if account else None,
            session.draft.theme,
        )
        return session

    async def get(self, session_id: str) -> DraftSession:
        """Return a live session by id. Raises KeyError if unknown or expired."""
        now = self._clock()
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is not None and self._is_expired(session, now):
                self._sessions.pop(session_id).closed = True
                logger.info("Draft session %s expired", session_id)
                session = None
            if session is not None:
                session.last_active_at = now
        if session is None:
            raise KeyError(f"Draft session not found: {session_id}")
        return session

    async def close(self, session_id: str) -> bool:
        """Discard a session. Returns True if it existed."""
        async with self._lock:
            removed = self._sessions.pop(session_id, None)
            if removed is not None:
                removed.closed = True
        if removed is not None:
            logger.debug("Closed draft session %s", session_id)
        return removed is not None

    @asynccontextmanager
    async def _locked(self, session_id: str) -> AsyncIterator[DraftSession]:
        session = await self.get(session_id)
        async with session.lock:
            # The session may have been submitted or closed while waiting.
            if session.closed:
                raise KeyError(f"Draft session not found: {session_id}")
            yield session

    async def edit(
        self,
        session_id: str,
        operation: Callable[[TaskDraftController], Task],
    ) -> Task:
        """Apply one draft transition under the session lock."""

        async with self._locked(session_id) as session:
            return operation(session.controller)

    async def submit_task(self, session_id: str) -> str:
        """Write the session's draft and close the session on success."""

        async with self._locked(session_id) as session:
            doc_id = await submit_task(self._store, session.controller, session.account)
            await self.close(session_id)
        return doc_id

    async def toggle_add_theme(self, session_id: str) -> bool:
        async with self._locked(session_id) as session:
            return session.theme_flow.toggle_visibility()

    async def set_theme_name(self, session_id: str, name: str) -> str:
        async with self._locked(session_id) as session:
            return session.theme_flow.set_name(name)

    async def submit_theme(self, session_id: str) -> Optional[Theme]:
        """Create a theme from the session's name draft."""

        async with self._locked(session_id) as session:
            return await session.theme_flow.submit(self._store, session.account)


__all__ = ["DEFAULT_SESSION_TTL", "DraftSession", "DraftSessionService"]

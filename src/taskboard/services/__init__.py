"""Service layer coordinating draft sessions and the document store."""

from .draft_sessions import DraftSession, DraftSessionService

__all__ = ["DraftSession", "DraftSessionService"]

"""FastAPI dependencies shared by the task routers."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Request, status

from ..services.draft_sessions import DraftSessionService
from ..store import DocumentStore
from ..tasks.models import AccountContext


def get_account_context(
    x_account_id: Annotated[Optional[str], Header()] = None,
) -> Optional[AccountContext]:
    """Read the signed-in account from the ``X-Account-Id`` header."""
    if x_account_id is None or not x_account_id.strip():
        return None
    return AccountContext(id=x_account_id.strip())


def get_draft_session_service(request: Request) -> DraftSessionService:
    """Dependency to get the draft session service from app state."""
    service = getattr(request.app.state, "draft_session_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Draft session service not initialized",
        )
    return service


def get_document_store(request: Request) -> DocumentStore:
    """Dependency to get the document store from app state."""
    store = getattr(request.app.state, "document_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Document store not initialized",
        )
    return store


AccountDep = Annotated[Optional[AccountContext], Depends(get_account_context)]
DraftSessionServiceDep = Annotated[DraftSessionService, Depends(get_draft_session_service)]
DocumentStoreDep = Annotated[DocumentStore, Depends(get_document_store)]


__all__ = [
    "get_account_context",
    "get_draft_session_service",
    "get_document_store",
    "AccountDep",
    "DraftSessionServiceDep",
    "DocumentStoreDep",
]

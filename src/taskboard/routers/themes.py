"""API router for listing an account's themes and inbox tasks."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, status

from ..schemas.drafts import ThemeList
from ..tasks.models import AccountContext, Task
from ..tasks.themes import list_inbox_tasks, list_themes
from .dependencies import AccountDep, DocumentStoreDep

router = APIRouter(prefix="/api/themes", tags=["themes"])


def _require_account(account: Optional[AccountContext]) -> AccountContext:
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No account found",
        )
    return account


@router.get("/", response_model=ThemeList)
async def get_themes(
    account: AccountDep,
    store: DocumentStoreDep,
    include_tasks: bool = False,
) -> ThemeList:
    """List themes of the calling account."""
    themes = await list_themes(
        store, _require_account(account).id, include_tasks=include_tasks
    )
    return ThemeList(themes=themes)


@router.get("/inbox/tasks", response_model=list[Task])
async def get_inbox_tasks(account: AccountDep, store: DocumentStoreDep) -> list[Task]:
    """List tasks filed under the inbox."""
    return await list_inbox_tasks(store, _require_account(account).id)


__all__ = ["router"]

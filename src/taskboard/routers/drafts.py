"""API router for editing and submitting task drafts."""

from __future__ import annotations

from typing import Callable, NoReturn

from fastapi import APIRouter, HTTPException, status

from ..errors import (
    DraftFieldError,
    EmptyThemeNameError,
    InvalidRepeatTransition,
    MissingAccountError,
    StoreWriteError,
)
from ..schemas.drafts import (
    DraftOpenRequest,
    DraftResponse,
    DueAtUpdate,
    FieldUpdate,
    RepeatIntervalUpdate,
    RepeatRangeUpdate,
    RepeatToggle,
    RepeatTypeUpdate,
    TaskCreated,
    ThemeCreated,
    ThemeNameUpdate,
)
from ..services.draft_sessions import DraftSession, DraftSessionService
from ..tasks.draft import TaskDraftController
from ..tasks.models import Task
from .dependencies import AccountDep, DraftSessionServiceDep

router = APIRouter(prefix="/api/drafts", tags=["drafts"])


def _raise_http(exc: Exception) -> NoReturn:
    if isinstance(exc, KeyError):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc.args[0]) if exc.args else "Draft session not found",
        ) from exc
    if isinstance(exc, MissingAccountError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc
    if isinstance(exc, (EmptyThemeNameError, DraftFieldError, InvalidRepeatTransition)):
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc
    if isinstance(exc, StoreWriteError):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc
    raise exc


def _to_response(session: DraftSession) -> DraftResponse:
    return DraftResponse(
        session_id=session.session_id,
        draft=session.draft,
        is_add_theme=session.theme_flow.is_add_theme,
        new_theme_name=session.theme_flow.new_theme_name,
    )


async def _edit(
    service: DraftSessionService,
    session_id: str,
    operation: Callable[[TaskDraftController], Task],
) -> DraftResponse:
    try:
        session = await service.get(session_id)
        await service.edit(session_id, operation)
    except (KeyError, DraftFieldError, InvalidRepeatTransition) as exc:
        _raise_http(exc)
    return _to_response(session)


@router.post("/", response_model=DraftResponse, status_code=status.HTTP_201_CREATED)
async def open_draft(
    body: DraftOpenRequest,
    account: AccountDep,
    service: DraftSessionServiceDep,
) -> DraftResponse:
    """Open a new draft session for the calling account."""
    try:
        session = await service.open_session(account, body.theme)
    except DraftFieldError as exc:
        _raise_http(exc)
    return _to_response(session)


@router.get("/{session_id}", response_model=DraftResponse)
async def get_draft(session_id: str, service: DraftSessionServiceDep) -> DraftResponse:
    try:
        session = await service.get(session_id)
    except KeyError as exc:
        _raise_http(exc)
    return _to_response(session)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_draft(session_id: str, service: DraftSessionServiceDep):
    """Discard a draft session without submitting it."""
    closed = await service.close(session_id)
    if not closed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Draft session not found: {session_id}",
        )


@router.patch("/{session_id}/fields", response_model=DraftResponse)
async def update_field(
    session_id: str,
    body: FieldUpdate,
    service: DraftSessionServiceDep,
) -> DraftResponse:
    return await _edit(
        service, session_id, lambda controller: controller.set_field(body.name, body.value)
    )


@router.put("/{session_id}/repeat", response_model=DraftResponse)
async def update_repeat(
    session_id: str,
    body: RepeatToggle,
    service: DraftSessionServiceDep,
) -> DraftResponse:
    return await _edit(
        service, session_id, lambda controller: controller.set_repeat(body.enabled)
    )


@router.put("/{session_id}/repeat/type", response_model=DraftResponse)
async def update_repeat_type(
    session_id: str,
    body: RepeatTypeUpdate,
    service: DraftSessionServiceDep,
) -> DraftResponse:
    return await _edit(
        service, session_id, lambda controller: controller.set_repeat_type(body.type)
    )


@router.put("/{session_id}/repeat/interval", response_model=DraftResponse)
async def update_repeat_interval(
    session_id: str,
    body: RepeatIntervalUpdate,
    service: DraftSessionServiceDep,
) -> DraftResponse:
    return await _edit(
        service,
        session_id,
        lambda controller: controller.set_repeat_interval(body.interval),
    )


@router.put("/{session_id}/repeat/range", response_model=DraftResponse)
async def update_repeat_range(
    session_id: str,
    body: RepeatRangeUpdate,
    service: DraftSessionServiceDep,
) -> DraftResponse:
    return await _edit(
        service,
        session_id,
        lambda controller: controller.set_repeat_range(body.from_, body.to),
    )


@router.post("/{session_id}/due-at/toggle", response_model=DraftResponse)
async def toggle_due_at(session_id: str, service: DraftSessionServiceDep) -> DraftResponse:
    return await _edit(service, session_id, lambda controller: controller.toggle_due_at())


@router.put("/{session_id}/due-at", response_model=DraftResponse)
async def update_due_at(
    session_id: str,
    body: DueAtUpdate,
    service: DraftSessionServiceDep,
) -> DraftResponse:
    return await _edit(
        service, session_id, lambda controller: controller.set_due_at_value(body.value)
    )


@router.post(
    "/{session_id}/submit",
    response_model=TaskCreated,
    status_code=status.HTTP_201_CREATED,
)
async def submit_draft(session_id: str, service: DraftSessionServiceDep) -> TaskCreated:
    """Write the draft to the store; the session is closed on success."""
    try:
        doc_id = await service.submit_task(session_id)
    except (KeyError, MissingAccountError, StoreWriteError) as exc:
        _raise_http(exc)
    return TaskCreated(id=doc_id)


@router.post("/{session_id}/themes/toggle", response_model=DraftResponse)
async def toggle_add_theme(session_id: str, service: DraftSessionServiceDep) -> DraftResponse:
    try:
        session = await service.get(session_id)
        await service.toggle_add_theme(session_id)
    except KeyError as exc:
        _raise_http(exc)
    return _to_response(session)


@router.put("/{session_id}/themes/name", response_model=DraftResponse)
async def update_theme_name(
    session_id: str,
    body: ThemeNameUpdate,
    service: DraftSessionServiceDep,
) -> DraftResponse:
    try:
        session = await service.get(session_id)
        await service.set_theme_name(session_id, body.name)
    except KeyError as exc:
        _raise_http(exc)
    return _to_response(session)


@router.post("/{session_id}/themes/submit", response_model=ThemeCreated)
async def submit_theme(session_id: str, service: DraftSessionServiceDep) -> ThemeCreated:
    """Create a theme from the session's name draft."""
    try:
        session = await service.get(session_id)
        theme = await service.submit_theme(session_id)
    except (KeyError, MissingAccountError, EmptyThemeNameError) as exc:
        _raise_http(exc)
    return ThemeCreated(
        created=theme is not None,
        theme=theme,
        is_add_theme=session.theme_flow.is_add_theme,
        new_theme_name=session.theme_flow.new_theme_name,
    )


__all__ = ["router"]

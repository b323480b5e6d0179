"""Convert tasks and themes to and from store documents.

Documents never carry the ``id`` field: the store assigns it on creation and
returns it alongside the payload on reads.
"""

from __future__ import annotations

from typing import Any

from .models import Task, Theme

Document = dict[str, Any]


def task_to_document(task: Task) -> Document:
    """Serialize ``task`` for the store, omitting ``id`` and absent fields."""

    payload = task.model_dump(mode="json", by_alias=True, exclude={"id"})
    # Optional sub-configurations are absent rather than null in stored documents.
    for key in ("repeat_data", "due_at"):
        if payload.get(key) is None:
            payload.pop(key, None)
    return payload


def task_from_document(doc_id: str, data: Document) -> Task:
    """Build a ``Task`` from a stored document and its assigned id."""

    payload = {key: value for key, value in data.items() if key != "id"}
    return Task.model_validate({**payload, "id": doc_id})


def theme_to_document(theme: Theme) -> Document:
    return theme.model_dump(mode="json", exclude={"id", "tasks"})


def theme_from_document(doc_id: str, data: Document) -> Theme:
    return Theme(id=doc_id, name=str(data.get("name", "")))


__all__ = [
    "Document",
    "task_to_document",
    "task_from_document",
    "theme_to_document",
    "theme_from_document",
]

"""Errors raised while editing drafts and writing them to the store."""

from __future__ import annotations


class TaskboardError(RuntimeError):
    """Base class for draft and submission failures."""


class MissingAccountError(TaskboardError):
    """Raised when a submission is attempted without an account context."""

    def __init__(self, message: str = "No account found") -> None:
        super().__init__(message)


class EmptyThemeNameError(TaskboardError, ValueError):
    """Raised when a new theme is submitted with a blank name."""

    def __init__(self, message: str = "Please enter theme name") -> None:
        super().__init__(message)


class StoreWriteError(TaskboardError):
    """Raised when the document store rejects a write."""


class InvalidRepeatTransition(TaskboardError, ValueError):
    """Raised when a repeat operation does not apply to the current config."""


class DraftFieldError(TaskboardError, ValueError):
    """Raised when a field cannot be set through the generic setter."""


__all__ = [
    "TaskboardError",
    "MissingAccountError",
    "EmptyThemeNameError",
    "StoreWriteError",
    "InvalidRepeatTransition",
    "DraftFieldError",
]

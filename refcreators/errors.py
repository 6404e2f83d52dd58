"""Error taxonomy for creator normalization and lookup"""

from __future__ import annotations

from typing import Any, Optional


class CreatorError(Exception):
    """Base error for the creator store."""


class ValidationError(CreatorError, ValueError):
    """Malformed creator input. `rule` names the violated rule."""

    def __init__(self, rule: str, message: str):
        super().__init__(message)
        self.rule = rule
        self.message = message


class NotFoundError(CreatorError, LookupError):
    """Requested creator is absent from both cache and store."""

    def __init__(self, creator_id: Any, message: Optional[str] = None):
        if message is None:
            message = (
                "creatorID not provided" if not creator_id else f"Creator {creator_id} not found"
            )
        super().__init__(message)
        self.creator_id = creator_id
        self.message = message


class CategoryResolutionWarning(UserWarning):
    """Unknown creator type label. Reported to the diagnostic channel, never raised."""

    def __init__(self, label: Any):
        super().__init__(f"'{label}' isn't a valid creator type")
        self.label = label

"""Domain value objects for Chorus."""

from chorus.domain.value.identifiers import ReplyId, ScopeId, UserId
from chorus.domain.value.types import (
    Author,
    DisplayName,
    RecordEventType,
    ViewAction,
)

__all__ = [
    # Identifiers
    "ReplyId",
    "ScopeId",
    "UserId",
    # Types
    "Author",
    "DisplayName",
    "RecordEventType",
    "ViewAction",
]

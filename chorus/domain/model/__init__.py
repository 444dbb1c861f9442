"""Domain model entities for Chorus."""

from chorus.domain.model.event import RecordEvent
from chorus.domain.model.like import LikeMarker, LikeToggle
from chorus.domain.model.render import (
    FocusRenderModel,
    RenderModel,
    RenderNode,
    ScopeRenderModel,
    VisibleReplies,
)
from chorus.domain.model.reply import Reply
from chorus.domain.model.view_state import ViewState

__all__ = [
    "FocusRenderModel",
    "LikeMarker",
    "LikeToggle",
    "RecordEvent",
    "RenderModel",
    "RenderNode",
    "Reply",
    "ScopeRenderModel",
    "ViewState",
    "VisibleReplies",
]

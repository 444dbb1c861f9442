"""Domain services."""

from .reply_service import ReplyService
from .thread_index import ThreadIndex
from .trending import trending_by_root, trending_descendant
from .visibility import (
    DEFAULT_VISIBLE_REPLIES,
    build_render_model,
    build_scope_model,
    is_effectively_visible,
    reveal,
    visible_replies,
)

__all__ = [
    "DEFAULT_VISIBLE_REPLIES",
    "ReplyService",
    "ThreadIndex",
    "build_render_model",
    "build_scope_model",
    "is_effectively_visible",
    "reveal",
    "trending_by_root",
    "trending_descendant",
    "visible_replies",
]

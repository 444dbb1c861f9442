"""Thread use cases."""

from .change_view import ChangeViewRequest, ChangeViewResponse, ChangeViewUseCase
from .get_thread import (
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    RenderNodeItem,
    ThreadItem,
)
from .submit_reply import SubmitReplyRequest, SubmitReplyResponse, SubmitReplyUseCase
from .toggle_like import ToggleLikeRequest, ToggleLikeResponse, ToggleLikeUseCase

__all__ = [
    "ChangeViewRequest",
    "ChangeViewResponse",
    "ChangeViewUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "RenderNodeItem",
    "SubmitReplyRequest",
    "SubmitReplyResponse",
    "SubmitReplyUseCase",
    "ThreadItem",
    "ToggleLikeRequest",
    "ToggleLikeResponse",
    "ToggleLikeUseCase",
]

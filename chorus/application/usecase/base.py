"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from chorus.application.session import ThreadSession
from chorus.application.session_manager import SessionManager
from chorus.config import ThreadSettings
from chorus.domain.value import Author, ScopeId


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class ViewerRequest(BaseModel):
    """Fields every thread request carries: the scope and who is looking."""

    scope_id: str
    viewer_id: str  # User ID from the identity collaborator
    viewer_display_name: str | None = None
    viewer_avatar_url: str | None = None
    viewer_is_system: bool = False


class ThreadUseCase(BaseUseCase):
    """Base for use cases that act through the viewer's thread session."""

    def __init__(
        self, session_manager: SessionManager, thread_settings: ThreadSettings
    ) -> None:
        """Initialize thread use case.

        Args:
            session_manager: Registry of open thread sessions
            thread_settings: Thread view settings
        """
        self.session_manager = session_manager
        self.thread_settings = thread_settings

    async def open_session(self, request: ViewerRequest) -> ThreadSession:
        """Get (or open) the viewer's session for the requested scope."""
        viewer = Author.from_identity(
            user_id=request.viewer_id,
            display_name=request.viewer_display_name,
            avatar_url=request.viewer_avatar_url,
            is_system=request.viewer_is_system,
            anonymous_name=self.thread_settings.anonymous_display_name,
        )
        return await self.session_manager.open(ScopeId(request.scope_id), viewer)

"""Thread session registry."""

import logfire

from chorus.application.session import ThreadSession
from chorus.config import ThreadSettings
from chorus.domain.repository import RecordStore
from chorus.domain.service import ReplyService
from chorus.domain.value import Author, ScopeId


class SessionManager:
    """Keeps at most one open ThreadSession per (scope, viewer).

    Sessions are process-local. Closing a session discards its view state;
    opening the same scope again starts from a fresh view.
    """

    def __init__(
        self,
        record_store: RecordStore,
        reply_service: ReplyService,
        thread_settings: ThreadSettings,
    ) -> None:
        """Initialize session manager.

        Args:
            record_store: Record store adapter shared by all sessions
            reply_service: Reply domain service
            thread_settings: Thread view settings
        """
        self.record_store = record_store
        self.reply_service = reply_service
        self.thread_settings = thread_settings
        self._sessions: dict[tuple[ScopeId, str], ThreadSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    async def open(self, scope_id: ScopeId, viewer: Author) -> ThreadSession:
        """Return the open session for (scope, viewer), opening one if needed."""
        key = (scope_id, viewer.id)
        session = self._sessions.get(key)
        if session is None or session.is_closed:
            session = ThreadSession(
                scope_id=scope_id,
                viewer=viewer,
                record_store=self.record_store,
                reply_service=self.reply_service,
                default_visible=self.thread_settings.default_visible_replies,
            )
            self._sessions[key] = session
            await session.open()
        return session

    def get(self, scope_id: ScopeId, viewer_id: str) -> ThreadSession | None:
        session = self._sessions.get((scope_id, viewer_id))
        if session is None or session.is_closed:
            return None
        return session

    async def close(self, scope_id: ScopeId, viewer_id: str) -> bool:
        """Close a session.

        Returns:
            True if a session was closed, False if none was open
        """
        session = self._sessions.pop((scope_id, viewer_id), None)
        if session is None:
            return False
        await session.close()
        return True

    async def close_all(self) -> None:
        """Close every session.

        A session that fails to close does not stop the others from being
        closed; the first failure is re-raised once all have been tried.
        """
        with logfire.span("session_manager.close_all", count=len(self._sessions)):
            sessions = list(self._sessions.values())
            self._sessions.clear()
            first_error: Exception | None = None
            for session in sessions:
                try:
                    await session.close()
                except Exception as e:
                    logfire.error(
                        "Failed to close thread session",
                        scope_id=session.scope_id,
                        viewer_id=session.viewer.id,
                        error=str(e),
                    )
                    if first_error is None:
                        first_error = e
            if first_error is not None:
                raise first_error

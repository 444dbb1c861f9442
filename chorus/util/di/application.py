"""Application layer DI providers."""

from dishka import Scope, provide

from chorus.application.session_manager import SessionManager
from chorus.application.usecase.thread import (
    ChangeViewUseCase,
    GetThreadUseCase,
    SubmitReplyUseCase,
    ToggleLikeUseCase,
)
from chorus.config import ThreadSettings
from chorus.domain.repository import RecordStore
from chorus.domain.service import ReplyService
from chorus.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.APP)
    def get_session_manager(
        self,
        record_store: RecordStore,
        reply_service: ReplyService,
        thread_settings: ThreadSettings,
    ) -> SessionManager:
        """Provide the process-wide thread session registry."""
        return SessionManager(
            record_store=record_store,
            reply_service=reply_service,
            thread_settings=thread_settings,
        )

    # Thread use cases
    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self, session_manager: SessionManager, thread_settings: ThreadSettings
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            session_manager=session_manager, thread_settings=thread_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_submit_reply_use_case(
        self, session_manager: SessionManager, thread_settings: ThreadSettings
    ) -> SubmitReplyUseCase:
        """Provide submit reply use case."""
        return SubmitReplyUseCase(
            session_manager=session_manager, thread_settings=thread_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(
        self, session_manager: SessionManager, thread_settings: ThreadSettings
    ) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(
            session_manager=session_manager, thread_settings=thread_settings
        )

    @provide(scope=Scope.REQUEST)
    def get_change_view_use_case(
        self, session_manager: SessionManager, thread_settings: ThreadSettings
    ) -> ChangeViewUseCase:
        """Provide change view use case."""
        return ChangeViewUseCase(
            session_manager=session_manager, thread_settings=thread_settings
        )

"""Domain layer DI providers."""

from dishka import Scope, provide

from chorus.config import ThreadSettings
from chorus.domain.repository import RecordStore
from chorus.domain.service import ReplyService
from chorus.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are APP-scoped: thread sessions are long-lived and
    process-local, so the services they hold must outlive any one request.
    """

    scope = Scope.APP

    @provide
    def get_reply_service(
        self, record_store: RecordStore, thread_settings: ThreadSettings
    ) -> ReplyService:
        """Provide reply domain service."""
        return ReplyService(
            record_store=record_store,
            max_content_length=thread_settings.max_content_length,
        )

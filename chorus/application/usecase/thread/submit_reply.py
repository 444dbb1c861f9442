"""Submit reply use case."""

from datetime import datetime

from pydantic import BaseModel

from chorus.domain.value import ReplyId

from ..base import ThreadUseCase, ViewerRequest


class SubmitReplyRequest(ViewerRequest):
    """Submit reply request."""

    content: str
    parent_id: str | None = None  # Reply being answered (None for top-level)
    use_draft_target: bool = False  # Resolve the parent from the view state


class SubmitReplyResponse(BaseModel):
    """Submit reply response."""

    reply_id: str
    scope_id: str
    parent_id: str | None
    content: str
    created_at: datetime
    expanded: list[str]  # Ids expanded in the viewer's session afterwards


class SubmitReplyUseCase(ThreadUseCase):
    """Use case for replying in a thread scope."""

    async def execute(self, request: SubmitReplyRequest) -> SubmitReplyResponse:
        """Execute submit reply flow.

        Steps:
        1. Get or open the viewer's session for the scope
        2. Submit through the session (validates, appends, reveals parent)

        When use_draft_target is set, parent_id is ignored and the parent is
        the session's draft target, else its focused reply, else none.

        Args:
            request: Submit reply request

        Returns:
            Stored reply details

        Raises:
            ValidationError: If content is empty or too long
            NotFoundError: If the parent reply does not exist
            WriteFailure: If the record store rejects the append
        """
        session = await self.open_session(request)
        if request.use_draft_target:
            reply = await session.reply_to_draft(request.content)
        else:
            parent_id = ReplyId(request.parent_id) if request.parent_id else None
            reply = await session.reply(parent_id, request.content)

        return SubmitReplyResponse(
            reply_id=reply.id,
            scope_id=reply.scope_id,
            parent_id=reply.parent_id,
            content=reply.content,
            created_at=reply.created_at,
            expanded=sorted(session.view_state.expanded),
        )

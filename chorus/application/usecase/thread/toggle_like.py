"""Toggle like use case."""

from pydantic import BaseModel

from chorus.domain.value import ReplyId

from ..base import ThreadUseCase, ViewerRequest


class ToggleLikeRequest(ViewerRequest):
    """Toggle like request."""

    reply_id: str


class ToggleLikeResponse(BaseModel):
    """Toggle like response."""

    reply_id: str
    liked: bool
    like_count: int


class ToggleLikeUseCase(ThreadUseCase):
    """Use case for liking or unliking a reply."""

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Args:
            request: Toggle like request

        Returns:
            Whether the viewer now likes the reply, and its like count

        Raises:
            NotFoundError: If the reply does not exist
            WriteFailure: If the record store rejects a write
        """
        session = await self.open_session(request)
        result = await session.like(ReplyId(request.reply_id))

        return ToggleLikeResponse(
            reply_id=result.reply_id,
            liked=result.liked,
            like_count=result.like_count,
        )

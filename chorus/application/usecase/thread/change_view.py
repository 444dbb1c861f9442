"""Change view use case."""

from pydantic import BaseModel

from chorus.domain.value import ReplyId, ViewAction

from ..base import ThreadUseCase, ViewerRequest

# Actions that do not target a particular reply
_UNTARGETED = {ViewAction.UNFOCUS, ViewAction.CLEAR_DRAFT_TARGET}


class ChangeViewRequest(ViewerRequest):
    """Change view request."""

    action: ViewAction
    node_id: str | None = None  # Required for every action except unfocus/clear


class ChangeViewResponse(BaseModel):
    """View state after the change."""

    expanded: list[str]
    collapsed: list[str]
    focused_node_id: str | None
    draft_reply_target: str | None


class ChangeViewUseCase(ThreadUseCase):
    """Use case for expand/collapse/focus/draft actions.

    These only touch the viewer's session; nothing is written to the
    record store.
    """

    async def execute(self, request: ChangeViewRequest) -> ChangeViewResponse:
        """Execute change view flow.

        Args:
            request: Change view request

        Returns:
            The viewer's view state after the action

        Raises:
            ValueError: If node_id is missing for an action that needs one
        """
        if request.action not in _UNTARGETED and not request.node_id:
            raise ValueError(f"node_id is required for {request.action.value}")

        session = await self.open_session(request)
        node_id = ReplyId(request.node_id) if request.node_id else None

        if request.action == ViewAction.TOGGLE_EXPAND:
            state = session.toggle_expand(node_id)
        elif request.action == ViewAction.TOGGLE_COLLAPSE:
            state = session.toggle_collapse(node_id)
        elif request.action == ViewAction.FOCUS:
            state = session.focus(node_id)
        elif request.action == ViewAction.UNFOCUS:
            state = session.unfocus()
        elif request.action == ViewAction.SET_DRAFT_TARGET:
            state = session.set_draft_target(node_id)
        else:  # ViewAction.CLEAR_DRAFT_TARGET
            state = session.clear_draft_target()

        return ChangeViewResponse(
            expanded=sorted(state.expanded),
            collapsed=sorted(state.collapsed),
            focused_node_id=state.focused_node_id,
            draft_reply_target=state.draft_reply_target,
        )

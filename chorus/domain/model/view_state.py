"""View state value object.

A ViewState records how one reader is looking at one thread scope: which
replies are expanded, which are collapsed, which reply is focused for
drill-down and which reply a draft is being written against.

It is process-local and never persisted. Every transition returns a new
instance so visibility can be computed by pure functions.
"""

from typing import Iterable, Optional

from pydantic import Field

from chorus.domain.model.common import DomainModel
from chorus.domain.value import ReplyId


class ViewState(DomainModel):
    """Per-scope view flags.

    expanded and collapsed are independent flags. A node may carry both;
    collapse always wins when deciding what is rendered beneath it, and
    clearing the collapse restores whatever expand flags were set below.
    """

    expanded: frozenset[ReplyId] = Field(default_factory=frozenset)
    collapsed: frozenset[ReplyId] = Field(default_factory=frozenset)
    focused_node_id: Optional[ReplyId] = None
    draft_reply_target: Optional[ReplyId] = None

    def is_expanded(self, node_id: ReplyId) -> bool:
        return node_id in self.expanded

    def is_collapsed(self, node_id: ReplyId) -> bool:
        return node_id in self.collapsed

    def toggle_expand(self, node_id: ReplyId) -> "ViewState":
        """Flip a node between default (last N replies) and expanded."""
        return self.model_copy(
            update={"expanded": self.expanded ^ frozenset({node_id})}
        )

    def toggle_collapse(self, node_id: ReplyId) -> "ViewState":
        """Flip whether a node's whole subtree is hidden."""
        return self.model_copy(
            update={"collapsed": self.collapsed ^ frozenset({node_id})}
        )

    def expand(self, node_id: ReplyId) -> "ViewState":
        return self.model_copy(update={"expanded": self.expanded | {node_id}})

    def uncollapse(self, node_ids: Iterable[ReplyId]) -> "ViewState":
        return self.model_copy(
            update={"collapsed": self.collapsed - frozenset(node_ids)}
        )

    def focus(self, node_id: ReplyId) -> "ViewState":
        """Narrow the view to one reply, its ancestors and its subtree."""
        return self.model_copy(update={"focused_node_id": node_id})

    def unfocus(self) -> "ViewState":
        return self.model_copy(update={"focused_node_id": None})

    def set_draft_target(self, node_id: ReplyId) -> "ViewState":
        return self.model_copy(update={"draft_reply_target": node_id})

    def clear_draft_target(self) -> "ViewState":
        return self.model_copy(update={"draft_reply_target": None})

    def forget(self, node_id: ReplyId) -> "ViewState":
        """Drop every flag that refers to a reply that no longer exists."""
        return self.model_copy(
            update={
                "expanded": self.expanded - {node_id},
                "collapsed": self.collapsed - {node_id},
                "focused_node_id": None
                if self.focused_node_id == node_id
                else self.focused_node_id,
                "draft_reply_target": None
                if self.draft_reply_target == node_id
                else self.draft_reply_target,
            }
        )

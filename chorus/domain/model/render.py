"""Render models produced by the visibility calculator.

These are plain data: a nested tree of RenderNodes describing exactly what
a presentation layer should draw. No rendering technology is implied.
"""

from typing import Optional

from pydantic import Field

from chorus.domain.model.common import DomainModel
from chorus.domain.model.reply import Reply
from chorus.domain.value import ReplyId, ScopeId


class VisibleReplies(DomainModel):
    """Visibility of one node's direct replies under the current view state."""

    shown: list[Reply] = Field(default_factory=list)
    hidden_count: int = Field(default=0, ge=0)
    show_trending_preview: bool = False


class RenderNode(DomainModel):
    """A reply together with its computed view state.

    reply_count is the number of direct replies whether or not they are
    shown, so a collapsed node can still offer an "N replies" affordance.
    hidden_count is the number of direct replies held back by the
    show-last-N rule; a "show N previous replies" affordance is exposed
    whenever it is positive.
    """

    reply: Reply
    depth: int = Field(ge=0)
    reply_count: int = Field(default=0, ge=0)
    descendant_count: int = Field(default=0, ge=0)
    hidden_count: int = Field(default=0, ge=0)
    is_expanded: bool = False
    is_collapsed: bool = False
    is_trending: bool = False
    is_trending_preview: bool = False
    is_focused: bool = False
    is_draft_target: bool = False
    is_orphan: bool = False
    children: list["RenderNode"] = Field(default_factory=list)

    @property
    def id(self) -> ReplyId:
        return self.reply.id

    def walk(self) -> list["RenderNode"]:
        """This node and every rendered node beneath it, depth first."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes


class RenderModel(DomainModel):
    """Everything needed to draw one top-level thread."""

    root: RenderNode
    visible: list[RenderNode] = Field(default_factory=list)
    trending_preview: Optional[RenderNode] = None
    hidden_counts: dict[ReplyId, int] = Field(default_factory=dict)

    @property
    def show_trending_preview(self) -> bool:
        return self.trending_preview is not None

    def rendered_ids(self) -> list[ReplyId]:
        """Ids drawn in the main tree, root first (preview excluded)."""
        return [node.id for node in self.root.walk()]


class FocusRenderModel(DomainModel):
    """Drill-down view: the ancestor chain followed by the focused thread."""

    ancestors: list[RenderNode] = Field(default_factory=list)
    focused: RenderModel


class ScopeRenderModel(DomainModel):
    """Everything needed to draw a whole thread scope.

    Exactly one of threads (normal view) or focus (drill-down) is populated.
    """

    scope_id: ScopeId
    threads: list[RenderModel] = Field(default_factory=list)
    focus: Optional[FocusRenderModel] = None
    orphan_ids: list[ReplyId] = Field(default_factory=list)

    @property
    def is_focused(self) -> bool:
        return self.focus is not None

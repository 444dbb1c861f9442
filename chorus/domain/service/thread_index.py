"""Thread index.

Builds and incrementally maintains the reply tree of one thread scope from
the flat stream of records the record store delivers.
"""

from bisect import insort
from collections import defaultdict
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

import logfire

from chorus.domain.error import OrphanReferenceError
from chorus.domain.model.event import RecordEvent
from chorus.domain.model.reply import Reply
from chorus.domain.value import RecordEventType, ReplyId


class ThreadIndex:
    """Id -> reply and parent -> ordered children maps for one scope.

    Children are filed under their raw parent_id even when that parent has
    not arrived yet, so records may be applied in any order: a reply that
    arrives before its parent is an orphan (rendered top-level) until the
    parent shows up, at which point it is re-homed without a rebuild.

    Every mutation bumps version, which callers can use to cache results
    derived from the index.
    """

    def __init__(self, records: Iterable[Reply] = ()) -> None:
        self._by_id: dict[ReplyId, Reply] = {}
        self._children: dict[ReplyId, list[ReplyId]] = defaultdict(list)
        self._reported_orphans: set[ReplyId] = set()
        self.version = 0
        for record in records:
            self.upsert(record)

    @classmethod
    def build(cls, records: Iterable[Reply]) -> "ThreadIndex":
        """Full rebuild from a snapshot of records."""
        return cls(records)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, reply_id: object) -> bool:
        return reply_id in self._by_id

    @property
    def by_id(self) -> Mapping[ReplyId, Reply]:
        return MappingProxyType(self._by_id)

    @property
    def children_of(self) -> dict[ReplyId, list[ReplyId]]:
        """Ordered child ids for every parent that resolves in the index."""
        return {
            parent_id: list(child_ids)
            for parent_id, child_ids in self._children.items()
            if parent_id in self._by_id and child_ids
        }

    @property
    def orphans(self) -> set[ReplyId]:
        """Replies whose parent_id does not resolve in the index."""
        return {
            reply.id
            for reply in self._by_id.values()
            if reply.parent_id is not None and reply.parent_id not in self._by_id
        }

    def get(self, reply_id: ReplyId) -> Optional[Reply]:
        return self._by_id.get(reply_id)

    def is_orphan(self, reply_id: ReplyId) -> bool:
        reply = self._by_id.get(reply_id)
        return (
            reply is not None
            and reply.parent_id is not None
            and reply.parent_id not in self._by_id
        )

    def children(self, reply_id: ReplyId) -> list[Reply]:
        """Direct replies of a node, oldest first."""
        if reply_id not in self._by_id:
            return []
        child_ids = self._children.get(reply_id, [])
        return [self._by_id[child_id] for child_id in child_ids]

    def roots(self) -> list[Reply]:
        """Top-level replies plus orphans, oldest first."""
        roots = [
            reply
            for reply in self._by_id.values()
            if reply.parent_id is None or reply.parent_id not in self._by_id
        ]
        roots.sort(key=lambda reply: reply.sort_key)
        return roots

    def descendants(self, reply_id: ReplyId) -> list[Reply]:
        """All transitive replies beneath a node, in no particular order."""
        found: list[Reply] = []
        seen: set[ReplyId] = {reply_id}

        def collect(parent_id: ReplyId) -> None:
            for child in self.children(parent_id):
                # Corrupt parent links could form a cycle
                if child.id in seen:
                    continue
                seen.add(child.id)
                found.append(child)
                collect(child.id)

        collect(reply_id)
        return found

    def descendant_counts(self, reply_id: ReplyId) -> dict[ReplyId, int]:
        """Descendant count of a node and of every node beneath it.

        One walk over the subtree, so callers rendering many nodes of the
        same thread do not pay for a descendants() call per node.
        """
        if reply_id not in self._by_id:
            return {}
        order: list[ReplyId] = []
        seen: set[ReplyId] = {reply_id}
        stack = [reply_id]
        while stack:
            node_id = stack.pop()
            order.append(node_id)
            for child in self.children(node_id):
                if child.id not in seen:
                    seen.add(child.id)
                    stack.append(child.id)

        # Children always come after their parent in order
        counts: dict[ReplyId, int] = {}
        for node_id in reversed(order):
            counts[node_id] = sum(
                counts[child.id] + 1
                for child in self.children(node_id)
                if child.id in counts
            )
        return counts

    def ancestors(self, reply_id: ReplyId) -> list[Reply]:
        """Resolvable ancestors of a node, top-level first, node excluded."""
        chain: list[Reply] = []
        seen: set[ReplyId] = {reply_id}
        current = self._by_id.get(reply_id)
        while current is not None and current.parent_id is not None:
            parent = self._by_id.get(current.parent_id)
            if parent is None or parent.id in seen:
                break
            seen.add(parent.id)
            chain.append(parent)
            current = parent
        chain.reverse()
        return chain

    def depth(self, reply_id: ReplyId) -> int:
        return len(self.ancestors(reply_id))

    def root_of(self, reply_id: ReplyId) -> Optional[Reply]:
        """The top-level reply (or orphan) a node ultimately hangs under."""
        chain = self.ancestors(reply_id)
        return chain[0] if chain else self._by_id.get(reply_id)

    def apply(self, event: RecordEvent) -> None:
        """Apply one event from the record store stream."""
        if event.type == RecordEventType.UPSERT:
            self.upsert(event.record)
        elif event.type == RecordEventType.REMOVE:
            self.remove(event.record.id)

    def upsert(self, record: Reply) -> None:
        """Insert a new reply or replace an existing one."""
        existing = self._by_id.get(record.id)
        if existing is not None and (
            existing.parent_id != record.parent_id
            or existing.created_at != record.created_at
        ):
            self._detach(existing)
            existing = None

        self._by_id[record.id] = record
        if existing is None:
            if record.parent_id is not None:
                insort(
                    self._children[record.parent_id],
                    record.id,
                    key=lambda child_id: self._by_id[child_id].sort_key,
                )
            # Children that arrived before this record are no longer orphans
            for child_id in self._children.get(record.id, []):
                self._reported_orphans.discard(child_id)
            self._report_if_orphan(record)
        self.version += 1

    def remove(self, reply_id: ReplyId) -> Optional[Reply]:
        """Drop a reply. Its children stay indexed and become orphans."""
        record = self._by_id.get(reply_id)
        if record is None:
            return None
        self._detach(record)
        del self._by_id[reply_id]
        self._reported_orphans.discard(reply_id)
        for child_id in self._children.get(reply_id, []):
            self._report_if_orphan(self._by_id[child_id])
        self.version += 1
        return record

    def _detach(self, record: Reply) -> None:
        if record.parent_id is None:
            return
        siblings = self._children.get(record.parent_id)
        if siblings and record.id in siblings:
            siblings.remove(record.id)
            if not siblings:
                del self._children[record.parent_id]

    def _report_if_orphan(self, record: Reply) -> None:
        if record.parent_id is None or record.parent_id in self._by_id:
            return
        if record.id in self._reported_orphans:
            return
        self._reported_orphans.add(record.id)
        error = OrphanReferenceError(record.id, record.parent_id)
        logfire.warn(
            "Orphan reply treated as top-level",
            reply_id=record.id,
            parent_id=record.parent_id,
            scope_id=record.scope_id,
            error=str(error),
        )

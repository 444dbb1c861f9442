"""Unit tests for ThreadIndex."""

from chorus.domain.model.event import RecordEvent
from chorus.domain.service import ThreadIndex
from tests.conftest import make_reply


class TestThreadIndexBuild:
    """Tests for building the index from a snapshot."""

    def test_children_sorted_by_created_at_regardless_of_arrival(self):
        """Siblings should be ordered oldest first whatever order they arrive in."""
        # Arrange
        records = [
            make_reply("c3", parent_id="r", minutes=3),
            make_reply("r", minutes=0),
            make_reply("c1", parent_id="r", minutes=1),
            make_reply("c2", parent_id="r", minutes=2),
        ]

        # Act
        index = ThreadIndex.build(records)

        # Assert
        assert [c.id for c in index.children("r")] == ["c1", "c2", "c3"]
        assert index.children_of == {"r": ["c1", "c2", "c3"]}

    def test_each_child_filed_under_exactly_one_parent(self):
        """Every resolvable parent_id places its child in exactly one list."""
        # Arrange
        records = [
            make_reply("a", minutes=0),
            make_reply("b", minutes=1),
            make_reply("a1", parent_id="a", minutes=2),
            make_reply("b1", parent_id="b", minutes=3),
            make_reply("a1x", parent_id="a1", minutes=4),
        ]

        # Act
        index = ThreadIndex(records)

        # Assert
        filed = [
            child_id
            for child_ids in index.children_of.values()
            for child_id in child_ids
        ]
        assert sorted(filed) == ["a1", "a1x", "b1"]
        assert len(filed) == len(set(filed))

    def test_timestamp_ties_broken_by_id(self):
        """Siblings with equal created_at should still have a stable order."""
        # Arrange
        records = [
            make_reply("r"),
            make_reply("b", parent_id="r", minutes=1),
            make_reply("a", parent_id="r", minutes=1),
        ]

        # Act
        index = ThreadIndex(records)

        # Assert
        assert [c.id for c in index.children("r")] == ["a", "b"]

    def test_roots_include_top_level_replies_oldest_first(self):
        """Roots should list every top-level reply in created_at order."""
        # Arrange
        index = ThreadIndex(
            [
                make_reply("late", minutes=5),
                make_reply("early", minutes=1),
                make_reply("child", parent_id="early", minutes=2),
            ]
        )

        # Act
        roots = index.roots()

        # Assert
        assert [r.id for r in roots] == ["early", "late"]


class TestThreadIndexNavigation:
    """Tests for ancestry and descendant queries."""

    def test_descendants_are_transitive(self):
        """Descendants should include grandchildren."""
        # Arrange
        index = ThreadIndex(
            [
                make_reply("r"),
                make_reply("c", parent_id="r", minutes=1),
                make_reply("g", parent_id="c", minutes=2),
                make_reply("other"),
            ]
        )

        # Act
        descendants = index.descendants("r")

        # Assert
        assert {d.id for d in descendants} == {"c", "g"}

    def test_ancestors_root_first(self):
        """Ancestors should run from the top-level reply down to the parent."""
        # Arrange
        index = ThreadIndex(
            [
                make_reply("r"),
                make_reply("c", parent_id="r", minutes=1),
                make_reply("g", parent_id="c", minutes=2),
            ]
        )

        # Act
        ancestors = index.ancestors("g")

        # Assert
        assert [a.id for a in ancestors] == ["r", "c"]
        assert index.depth("g") == 2
        assert index.depth("r") == 0
        assert index.root_of("g").id == "r"

    def test_unknown_reply_has_no_children(self):
        """Querying an id that is not indexed should be harmless."""
        index = ThreadIndex([make_reply("r")])

        assert index.children("missing") == []
        assert index.ancestors("missing") == []
        assert index.get("missing") is None

    def test_descendant_counts_cover_whole_subtree(self):
        """One walk yields the descendant count of every node beneath the root."""
        # Arrange
        index = ThreadIndex(
            [
                make_reply("r"),
                make_reply("a", parent_id="r", minutes=1),
                make_reply("a1", parent_id="a", minutes=2),
                make_reply("a2", parent_id="a", minutes=3),
                make_reply("b", parent_id="r", minutes=4),
                make_reply("other"),
            ]
        )

        # Act
        counts = index.descendant_counts("r")

        # Assert
        assert counts == {"r": 4, "a": 2, "a1": 0, "a2": 0, "b": 0}
        assert counts["r"] == len(index.descendants("r"))
        assert index.descendant_counts("missing") == {}


class TestThreadIndexIncremental:
    """Tests for applying stream events."""

    def test_child_before_parent_is_orphan_then_rehomed(self):
        """A reply arriving before its parent should re-home when the parent arrives."""
        # Arrange
        index = ThreadIndex()
        index.apply(RecordEvent.upsert(make_reply("c", parent_id="r", minutes=1)))

        # Assert - orphan rendered as top-level
        assert index.orphans == {"c"}
        assert index.is_orphan("c")
        assert [r.id for r in index.roots()] == ["c"]

        # Act
        index.apply(RecordEvent.upsert(make_reply("r")))

        # Assert - re-homed without rebuild
        assert index.orphans == set()
        assert [r.id for r in index.roots()] == ["r"]
        assert [c.id for c in index.children("r")] == ["c"]

    def test_upsert_replaces_like_count_in_place(self):
        """Updating like_count should not move or duplicate the reply."""
        # Arrange
        index = ThreadIndex(
            [
                make_reply("r"),
                make_reply("c1", parent_id="r", minutes=1),
                make_reply("c2", parent_id="r", minutes=2),
            ]
        )
        version = index.version

        # Act
        index.upsert(make_reply("c1", parent_id="r", minutes=1, like_count=4))

        # Assert
        assert [c.id for c in index.children("r")] == ["c1", "c2"]
        assert index.get("c1").like_count == 4
        assert len(index) == 3
        assert index.version == version + 1

    def test_remove_makes_children_orphans(self):
        """Removing a reply should keep its children as orphans."""
        # Arrange
        index = ThreadIndex(
            [
                make_reply("r"),
                make_reply("c", parent_id="r", minutes=1),
                make_reply("g", parent_id="c", minutes=2),
            ]
        )

        # Act
        removed = index.remove("c")

        # Assert
        assert removed.id == "c"
        assert "c" not in index
        assert index.children("r") == []
        assert index.orphans == {"g"}
        assert [r.id for r in index.roots()] == ["r", "g"]

    def test_remove_event_for_unknown_reply_is_ignored(self):
        """Removing a reply that was never indexed should do nothing."""
        # Arrange
        index = ThreadIndex([make_reply("r")])

        # Act
        index.apply(RecordEvent.remove(make_reply("ghost")))

        # Assert
        assert len(index) == 1

    def test_self_parent_does_not_loop(self):
        """A corrupt self-referencing reply should not hang traversal."""
        # Arrange
        index = ThreadIndex([make_reply("loop", parent_id="loop")])

        # Act
        descendants = index.descendants("loop")
        ancestors = index.ancestors("loop")

        # Assert
        assert descendants == []
        assert ancestors == []

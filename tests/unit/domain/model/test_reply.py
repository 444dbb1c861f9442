"""Unit tests for Reply and Author."""

import pytest
from pydantic import ValidationError

from chorus.domain.model.reply import Reply
from chorus.domain.value import Author
from tests.conftest import make_reply


class TestReply:
    """Tests for the Reply entity."""

    def test_like_count_never_negative(self):
        """Adjusting below zero clamps at zero."""
        reply = make_reply("r", like_count=1)

        assert reply.with_like_count(-3).like_count == 0
        assert reply.with_like_count(5).like_count == 5
        assert reply.like_count == 1

    def test_empty_content_rejected(self):
        data = {**make_reply("r").model_dump(), "content": ""}

        with pytest.raises(ValidationError):
            Reply.model_validate(data)

    def test_unknown_fields_rejected(self):
        """A record carrying fields this version does not know is refused."""
        data = {**make_reply("r").model_dump(), "reactions": {"+1": 2}}

        with pytest.raises(ValidationError):
            Reply.model_validate(data)

    def test_reply_is_frozen(self):
        reply = make_reply("r")

        with pytest.raises(ValidationError):
            reply.content = "edited"

    def test_top_level(self):
        assert make_reply("r").is_top_level
        assert not make_reply("c", parent_id="r").is_top_level


class TestAuthor:
    """Tests for building authors from identity data."""

    def test_missing_display_name_uses_anonymous(self):
        """Users without a display name are shown anonymously."""
        author = Author.from_identity("u1", None, anonymous_name="Guest")

        assert author.display_name.root == "Guest"

    def test_blank_display_name_uses_anonymous(self):
        author = Author.from_identity("u1", "   ")

        assert author.display_name.root == "Anonymous"

    def test_system_author(self):
        author = Author.from_identity("bot", "Assistant", is_system=True)

        assert author.is_system is True
        assert str(author.display_name) == "Assistant"

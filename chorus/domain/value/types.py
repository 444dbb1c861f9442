"""Domain value objects for Chorus.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from chorus.domain.value.common import RootValueObject, ValueObject
from chorus.domain.value.identifiers import UserId


class RecordEventType(str, Enum):
    """Type of change delivered by the record store stream."""

    UPSERT = "upsert"
    REMOVE = "remove"


class ViewAction(str, Enum):
    """View-only actions a reader can take on a thread."""

    TOGGLE_EXPAND = "toggle_expand"
    TOGGLE_COLLAPSE = "toggle_collapse"
    FOCUS = "focus"
    UNFOCUS = "unfocus"
    SET_DRAFT_TARGET = "set_draft_target"
    CLEAR_DRAFT_TARGET = "clear_draft_target"


class DisplayName(RootValueObject[str]):
    """Human readable author name shown next to a reply."""

    @field_validator("root")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        """Validate display name is not blank and within length limits."""
        if not v.strip():
            raise ValueError("Display name must not be blank")
        if len(v) > 255:
            raise ValueError("Display name must be 1-255 characters")
        return v


class Author(ValueObject):
    """Author of a reply as supplied by the identity collaborator."""

    id: UserId
    display_name: DisplayName
    avatar_url: str | None = None
    is_system: bool = False  # Automated participant (assistant, bot)

    @classmethod
    def from_identity(
        cls,
        user_id: str,
        display_name: str | None,
        avatar_url: str | None = None,
        is_system: bool = False,
        anonymous_name: str = "Anonymous",
    ) -> "Author":
        """Build an author from raw identity data.

        Users without a display name are shown under anonymous_name.
        """
        name = (
            display_name
            if display_name and display_name.strip()
            else anonymous_name
        )
        return cls(
            id=UserId(user_id),
            display_name=DisplayName(name),
            avatar_url=avatar_url,
            is_system=is_system,
        )

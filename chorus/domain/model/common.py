"""Shared configuration for Chorus domain models."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen record shared by replies, like markers, events and render trees.

    Updates go through model_copy so a render pass can hold on to a reply or
    view state without it changing underneath it. Unknown fields are
    rejected so a record from a newer writer fails loudly instead of being
    silently truncated.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

"""Record events delivered by the record store stream."""

from chorus.domain.model.common import DomainModel
from chorus.domain.model.reply import Reply
from chorus.domain.value import RecordEventType


class RecordEvent(DomainModel):
    """A single upsert or removal of a reply within a thread scope."""

    type: RecordEventType
    record: Reply

    @classmethod
    def upsert(cls, record: Reply) -> "RecordEvent":
        return cls(type=RecordEventType.UPSERT, record=record)

    @classmethod
    def remove(cls, record: Reply) -> "RecordEvent":
        return cls(type=RecordEventType.REMOVE, record=record)

"""Repository interfaces for the Chorus domain.

Interfaces are defined in the domain layer (dependency inversion).
Implementations live in the adapter layer.
"""

from chorus.domain.repository.record_store import RecordStore

__all__ = [
    "RecordStore",
]

"""Provider metadata used when assembling the Chorus container."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a swappable mock implementation
Component = Literal["record_store"]


class ProviderBase(Provider):
    """Provider that declares which component it supplies.

    get_provider() picks between the real and mock record store by reading
    these flags, so tests can swap the store without touching the rest of
    the container.

    Attributes:
        __mock_component__: Component this provider supplies, or None for
            providers with no mock counterpart
        __is_mock__: True for the in-memory test double
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

"""Provider base class and component names."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure components that tests can swap for in-memory doubles
Component = Literal["persistence", "transport", "notification", "clock"]


class ProviderBase(Provider):
    """Common base for every provider in the container.

    A component base sets ``__mock_component__`` and gets exactly two
    subclasses: the production implementation and a mock flagged with
    ``__is_mock__``. Core providers set neither and are used as-is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

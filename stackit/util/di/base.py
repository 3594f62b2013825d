"""Provider base class."""

from typing import ClassVar, Literal

from dishka import Provider

# Components the test suite swaps for in-process doubles
Component = Literal["notification", "persistence"]


class ProviderBase(Provider):
    """A dishka provider that knows whether it is a test double.

    Attributes:
        __mock_component__: Component this provider implements, None for
            providers that are never swapped
        __is_mock__: True for the test double of a component
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

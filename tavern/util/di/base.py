"""Provider base class with test-swap metadata."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests replace with in-memory variants
Component = Literal["persistence", "storage"]


class ProviderBase(Provider):
    """Provider that knows whether it can be swapped in tests.

    A swappable component is declared by an intermediate class naming its
    ``__mock_component__``. The PostgreSQL or filesystem variant and the
    in-memory variant both subclass it and set ``__is_mock__``. Config,
    domain and use case providers set neither and are always used as-is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def variant(cls, use_mock: bool) -> type["ProviderBase"]:
        """Pick the production or in-memory subclass of a component.

        Args:
            use_mock: Whether to return the in-memory variant

        Returns:
            Provider class to instantiate

        Raises:
            ValueError: If the component has no such variant registered
        """
        if cls.__mock_component__ is None:
            return cls

        for subclass in cls.__subclasses__():
            if subclass.__is_mock__ == use_mock:
                return subclass

        kind = "in-memory" if use_mock else "production"
        raise ValueError(f"No {kind} provider for {cls.__mock_component__}")

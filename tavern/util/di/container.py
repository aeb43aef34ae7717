"""Container assembly."""

from collections.abc import Iterable

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from tavern.util.di import COMPONENTS, PROVIDERS, Component, ProviderBase


def build_providers(mocked: Iterable[Component] = ()) -> list[ProviderBase]:
    """Instantiate every provider, using in-memory variants for ``mocked``.

    The in-memory variants must have been imported so they are registered
    as subclasses of their component.

    Raises:
        ValueError: If ``mocked`` names an unknown component
    """
    mocked = set(mocked)
    unknown = mocked - COMPONENTS
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    return [base.variant(base.__mock_component__ in mocked)() for base in PROVIDERS]


def create_container(mocked: Iterable[Component] = ()) -> AsyncContainer:
    """Build the container served by the API.

    Settings are read from the environment when first resolved.
    """
    return make_async_container(*build_providers(mocked), FastapiProvider())

"""Adapter DI providers."""

from dishka import Scope, provide

from tavern.adapter.card import TavernCardCodec
from tavern.domain.service import CardCodec
from tavern.util.di.base import ProviderBase


class ProdAdapterProvider(ProviderBase):
    """Stateless adapters - concrete, no mocks needed."""

    scope = Scope.APP

    @provide
    def get_card_codec(self) -> CardCodec:
        """Provide the character card codec."""
        return TavernCardCodec()

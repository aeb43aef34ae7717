"""Character card adapter."""

from .codec import TavernCardCodec

__all__ = ["TavernCardCodec"]

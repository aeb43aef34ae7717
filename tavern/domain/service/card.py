"""Character card codec port."""

from typing import Any

from tavern.domain.value import CardFormat


class CardCodec:
    """Reads and writes character card data in uploaded files."""

    def parse(self, content: bytes, card_format: CardFormat) -> dict[str, Any]:
        """Extract the card JSON from a file.

        Raises:
            ValidationError: If the file is not a valid card
        """
        raise NotImplementedError

    def embed(self, png: bytes, data: dict[str, Any]) -> bytes:
        """Return a copy of a PNG with ``data`` embedded as card metadata.

        Raises:
            ValidationError: If ``png`` is not a PNG image
        """
        raise NotImplementedError

"""Character card codec for PNG, JSON and YAML card files."""

import base64
import binascii
import json
from typing import Any

import logfire
import yaml

from tavern.domain.error import ValidationError
from tavern.domain.service.card import CardCodec
from tavern.domain.value import CardFormat

from .png import PNGFormatError, read_text_chunks, write_text_chunk

INVALID_CARD_MESSAGE = "Invalid or corrupted character card file"


class TavernCardCodec(CardCodec):
    """Card codec compatible with the chat application's card format.

    PNG cards carry base64 JSON in a ``ccv3`` (preferred) or ``chara``
    text chunk.
    """

    def parse(self, content: bytes, card_format: CardFormat) -> dict[str, Any]:
        """Extract card data from an uploaded file.

        Args:
            content: Raw file content
            card_format: Detected file format

        Returns:
            Card data as a JSON object

        Raises:
            ValidationError: If the file is not a valid card
        """
        with logfire.span(
            "card_codec.parse", card_format=card_format.value, size=len(content)
        ):
            try:
                if card_format == CardFormat.PNG:
                    data = self._parse_png(content)
                elif card_format == CardFormat.YAML:
                    data = yaml.safe_load(content.decode("utf-8")) or {}
                else:
                    data = json.loads(content.decode("utf-8"))
            except (
                PNGFormatError,
                UnicodeDecodeError,
                binascii.Error,
                json.JSONDecodeError,
                yaml.YAMLError,
            ) as e:
                logfire.warn(
                    "Card parse failed", card_format=card_format.value, error=str(e)
                )
                raise ValidationError(INVALID_CARD_MESSAGE) from e

            if not isinstance(data, dict):
                logfire.warn(
                    "Card data is not an object", card_format=card_format.value
                )
                raise ValidationError(INVALID_CARD_MESSAGE)
            return data

    def _parse_png(self, content: bytes) -> Any:
        texts = {k.lower(): v for k, v in read_text_chunks(content).items()}
        payload = texts.get("ccv3") or texts.get("chara")
        if payload is None:
            raise PNGFormatError("No character metadata in PNG")
        return json.loads(base64.b64decode(payload, validate=True).decode("utf-8"))

    def embed(self, png: bytes, data: dict[str, Any]) -> bytes:
        """Return the PNG with ``data`` written into a fresh ``chara`` chunk.

        Raises:
            ValidationError: If ``png`` is not a PNG image
        """
        payload = base64.b64encode(
            json.dumps(data, ensure_ascii=False).encode("utf-8")
        ).decode("ascii")
        try:
            return write_text_chunk(png, "chara", payload)
        except PNGFormatError as e:
            logfire.error("Card embed failed", error=str(e))
            raise ValidationError(INVALID_CARD_MESSAGE) from e

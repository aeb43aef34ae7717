"""Minimal PNG chunk reader/writer for character card metadata.

Character cards keep their JSON base64-encoded in ``tEXt`` chunks. Only
the chunk framing is handled here; image data is passed through untouched.
"""

import struct
import zlib
from typing import Iterator, NamedTuple

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

CARD_KEYWORDS = ("chara", "ccv3")


class PNGFormatError(ValueError):
    """The input is not a well-formed PNG."""

    pass


class Chunk(NamedTuple):
    """A raw PNG chunk."""

    type: bytes
    data: bytes


def iter_chunks(png: bytes) -> Iterator[Chunk]:
    """Iterate over the chunks of a PNG image up to and including IEND.

    Raises:
        PNGFormatError: On a bad signature, truncated chunk or CRC mismatch
    """
    if not png.startswith(PNG_SIGNATURE):
        raise PNGFormatError("Missing PNG signature")

    pos = len(PNG_SIGNATURE)
    while pos < len(png):
        if pos + 8 > len(png):
            raise PNGFormatError("Truncated chunk header")
        (length,) = struct.unpack(">I", png[pos : pos + 4])
        chunk_type = png[pos + 4 : pos + 8]
        data_end = pos + 8 + length
        if data_end + 4 > len(png):
            raise PNGFormatError("Truncated chunk")
        data = png[pos + 8 : data_end]
        (crc,) = struct.unpack(">I", png[data_end : data_end + 4])
        if zlib.crc32(chunk_type + data) & 0xFFFFFFFF != crc:
            raise PNGFormatError(f"CRC mismatch in {chunk_type!r} chunk")

        yield Chunk(chunk_type, data)
        pos = data_end + 4

        if chunk_type == b"IEND":
            return

    raise PNGFormatError("Missing IEND chunk")


def encode_chunk(chunk: Chunk) -> bytes:
    """Serialize a chunk with its length prefix and CRC."""
    crc = zlib.crc32(chunk.type + chunk.data) & 0xFFFFFFFF
    return (
        struct.pack(">I", len(chunk.data))
        + chunk.type
        + chunk.data
        + struct.pack(">I", crc)
    )


def read_text_chunks(png: bytes) -> dict[str, str]:
    """Collect ``tEXt`` chunks as a keyword -> text mapping (first wins)."""
    texts: dict[str, str] = {}
    for chunk in iter_chunks(png):
        if chunk.type != b"tEXt":
            continue
        keyword, sep, text = chunk.data.partition(b"\x00")
        if not sep:
            continue
        texts.setdefault(keyword.decode("latin-1"), text.decode("latin-1"))
    return texts


def write_text_chunk(png: bytes, keyword: str, text: str) -> bytes:
    """Replace all card chunks with a single ``tEXt`` chunk before IEND.

    Args:
        png: Source image
        keyword: Chunk keyword
        text: Latin-1 encodable text (card payloads are base64)

    Returns:
        The rewritten PNG
    """
    out = [PNG_SIGNATURE]
    for chunk in iter_chunks(png):
        if chunk.type == b"tEXt":
            chunk_keyword = chunk.data.partition(b"\x00")[0].decode("latin-1").lower()
            if chunk_keyword in CARD_KEYWORDS:
                continue
        if chunk.type == b"IEND":
            payload = keyword.encode("latin-1") + b"\x00" + text.encode("latin-1")
            out.append(encode_chunk(Chunk(b"tEXt", payload)))
        out.append(encode_chunk(chunk))
    return b"".join(out)

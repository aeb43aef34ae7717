"""Test configuration and helpers."""

import base64
import json
import struct
import zlib
from datetime import datetime, timedelta, timezone
from typing import Any

from tavern.domain.model import Comment, Principal
from tavern.domain.value import Author, CommentId, TargetType

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_comment(
    comment_id: str,
    parent_id: str | None = None,
    minutes: int = 0,
    target_id: str = "article-1",
    target_type: TargetType = TargetType.ARTICLE,
    author: str = "alice",
) -> Comment:
    """Build a comment created ``minutes`` after a fixed base time."""
    created_at = BASE_TIME + timedelta(minutes=minutes)
    return Comment(
        id=CommentId(comment_id),
        target_id=target_id,
        target_type=target_type,
        parent_id=CommentId(parent_id) if parent_id else None,
        content=f"comment {comment_id}",
        author=Author(handle=author, name=author.title()),
        created_at=created_at,
        updated_at=created_at,
    )


def make_principal(handle: str = "alice", admin: bool = False) -> Principal:
    """Build an authenticated caller."""
    return Principal(handle=handle, name=handle.title(), admin=admin)


def _chunk(chunk_type: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(chunk_type + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


def make_png(text_chunks: dict[str, str] | None = None) -> bytes:
    """Build a valid 1x1 grayscale PNG with optional ``tEXt`` chunks."""
    ihdr = struct.pack(">IIBBBBB", 1, 1, 8, 0, 0, 0, 0)
    idat = zlib.compress(b"\x00\x00")
    chunks = [_chunk(b"IHDR", ihdr)]
    for keyword, text in (text_chunks or {}).items():
        chunks.append(_chunk(b"tEXt", keyword.encode("latin-1") + b"\x00" + text.encode("latin-1")))
    chunks.append(_chunk(b"IDAT", idat))
    chunks.append(_chunk(b"IEND", b""))
    return b"\x89PNG\r\n\x1a\n" + b"".join(chunks)


def make_card_png(data: dict[str, Any], keyword: str = "chara") -> bytes:
    """Build a PNG character card carrying ``data``."""
    payload = base64.b64encode(json.dumps(data).encode("utf-8")).decode("ascii")
    return make_png({keyword: payload})

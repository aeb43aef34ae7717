"""Domain value objects: enums, author references and forum categories."""

from enum import Enum
from pathlib import PurePath

from pydantic import BaseModel, ConfigDict, Field


class ValueObject(BaseModel):
    """Frozen model compared field by field."""

    model_config = ConfigDict(frozen=True)


class TargetType(str, Enum):
    """Kind of entity a comment is attached to."""

    ARTICLE = "article"
    CHARACTER = "character"


class Author(ValueObject):
    """Denormalized author (or uploader) reference stored on records."""

    handle: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)


class ForumCategory(ValueObject):
    """Forum category shown in the category picker."""

    id: str
    name: str
    description: str


FORUM_CATEGORIES: tuple[ForumCategory, ...] = (
    ForumCategory(id="tutorial", name="教程", description="使用教程和指南"),
    ForumCategory(id="discussion", name="讨论", description="一般讨论和交流"),
    ForumCategory(id="announcement", name="公告", description="官方公告和通知"),
    ForumCategory(id="question", name="问答", description="问题和解答"),
    ForumCategory(id="showcase", name="展示", description="作品展示和分享"),
)

DEFAULT_CATEGORY = "discussion"


class CardFormat(str, Enum):
    """Supported character card file formats."""

    PNG = "png"
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def detect(cls, content_type: str | None, filename: str | None) -> "CardFormat | None":
        """Detect the card format from MIME type and file extension.

        Args:
            content_type: MIME type reported by the client
            filename: Original file name

        Returns:
            Detected format, or None if unsupported
        """
        mime = (content_type or "").lower()
        ext = PurePath(filename or "").suffix.lower()

        if mime == "image/png" or ext == ".png":
            return cls.PNG
        if "json" in mime or ext == ".json":
            return cls.JSON
        if "yaml" in mime or ext in (".yaml", ".yml"):
            return cls.YAML
        return None


class StorageBucket(str, Enum):
    """Directories (relative to the data root) holding uploaded binaries."""

    FORUM_IMAGES = "forum_data/images"
    PUBLIC_CHARACTERS = "public_characters"

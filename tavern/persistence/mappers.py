"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping. The nested author
reference is flattened into ``*_handle`` / ``*_name`` columns.
"""

from typing import Any, Dict

from tavern.domain.model import Article, Character, Comment
from tavern.domain.value import ArticleId, Author, CharacterId, CommentId, TargetType


def row_to_article(row: Dict[str, Any]) -> Article:
    """Convert database row to Article domain model.

    Args:
        row: Database row as dict

    Returns:
        Article domain model
    """
    return Article(
        id=ArticleId(row["id"]),
        title=row["title"],
        content=row["content"],
        category=row["category"],
        tags=list(row.get("tags") or []),
        author=Author(handle=row["author_handle"], name=row["author_name"]),
        views=row["views"],
        likes=row["likes"],
        liked_by=list(row.get("liked_by") or []),
        comments_count=row["comments_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def article_to_dict(article: Article) -> Dict[str, Any]:
    """Convert Article domain model to database dict.

    Args:
        article: Article domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = article.model_dump(exclude={"author"})
    data["author_handle"] = article.author.handle
    data["author_name"] = article.author.name
    return data


def row_to_character(row: Dict[str, Any]) -> Character:
    """Convert database row to Character domain model.

    Listing queries don't select ``character_data``; it maps to an empty dict.

    Args:
        row: Database row as dict

    Returns:
        Character domain model
    """
    return Character(
        id=CharacterId(row["id"]),
        name=row["name"],
        description=row.get("description") or "",
        tags=list(row.get("tags") or []),
        uploader=Author(handle=row["uploader_handle"], name=row["uploader_name"]),
        character_data=row.get("character_data") or {},
        avatar=row["avatar"],
        downloads=row["downloads"],
        views=row["views"],
        likes=row["likes"],
        uploaded_at=row["uploaded_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def character_to_dict(character: Character) -> Dict[str, Any]:
    """Convert Character domain model to database dict."""
    data = character.model_dump(exclude={"uploader"})
    data["uploader_handle"] = character.uploader.handle
    data["uploader_name"] = character.uploader.name
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(row["id"]),
        target_id=row["target_id"],
        target_type=TargetType(row["target_type"]),
        parent_id=CommentId(parent_id) if parent_id else None,
        content=row["content"],
        author=Author(handle=row["author_handle"], name=row["author_name"]),
        likes=row["likes"],
        liked_by=list(row.get("liked_by") or []),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    data = comment.model_dump(exclude={"author"})
    data["target_type"] = comment.target_type.value
    data["author_handle"] = comment.author.handle
    data["author_name"] = comment.author.name
    return data

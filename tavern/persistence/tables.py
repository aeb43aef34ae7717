"""SQLAlchemy table definitions for the community service.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ARTICLES TABLE
# ============================================================================
articles_table = Table(
    "articles",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False),
    Column("category", String(50), nullable=False, server_default="discussion"),
    Column("tags", ARRAY(Text), nullable=False, server_default="{}"),
    Column("author_handle", String(255), nullable=False),
    Column("author_name", String(255), nullable=False),
    Column("views", Integer, nullable=False, server_default="0"),
    Column("likes", Integer, nullable=False, server_default="0"),
    Column("liked_by", ARRAY(String(255)), nullable=False, server_default="{}"),
    Column("comments_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("views >= 0", name="article_views_non_negative"),
    CheckConstraint("likes >= 0", name="article_likes_non_negative"),
)

Index("idx_articles_created_at", articles_table.c.created_at.desc())
Index("idx_articles_category", articles_table.c.category)
Index("idx_articles_author_handle", articles_table.c.author_handle)

# ============================================================================
# PUBLIC CHARACTERS TABLE
# ============================================================================
public_characters_table = Table(
    "public_characters",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column("tags", ARRAY(Text), nullable=False, server_default="{}"),
    Column("uploader_handle", String(255), nullable=False),
    Column("uploader_name", String(255), nullable=False),
    Column("character_data", JSONB, nullable=False, server_default="{}"),
    Column("avatar", String(255), nullable=False),  # Stored card file name
    Column("downloads", Integer, nullable=False, server_default="0"),
    Column("views", Integer, nullable=False, server_default="0"),
    Column("likes", Integer, nullable=False, server_default="0"),
    Column(
        "uploaded_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_public_characters_uploaded_at", public_characters_table.c.uploaded_at.desc())
Index(
    "idx_public_characters_uploader_handle", public_characters_table.c.uploader_handle
)

# ============================================================================
# COMMENTS TABLE (shared by articles and characters)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("target_id", String(64), nullable=False),
    Column(
        "target_type",
        postgresql.ENUM(
            "article", "character", name="comment_target_type", create_type=False
        ),
        nullable=False,
    ),
    # No foreign key: a reply may outlive its parent and is then shown as a root
    Column("parent_id", String(64), nullable=True),
    Column("content", Text, nullable=False),
    Column("author_handle", String(255), nullable=False),
    Column("author_name", String(255), nullable=False),
    Column("likes", Integer, nullable=False, server_default="0"),
    Column("liked_by", ARRAY(String(255)), nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_target", comments_table.c.target_type, comments_table.c.target_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_created_at", comments_table.c.created_at)

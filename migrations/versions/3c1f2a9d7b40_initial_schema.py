"""initial_schema

Create the community schema:
- Articles (forum posts with category, tags, views, likes)
- Public characters (shared character cards)
- Comments (threaded, attached to an article or a character)

Revision ID: 3c1f2a9d7b40
Revises:
Create Date: 2026-10-19 10:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE comment_target_type AS ENUM ('article', 'character');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # ARTICLES table
    # ========================================================================
    op.create_table(
        "articles",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "category", sa.String(50), nullable=False, server_default="discussion"
        ),
        sa.Column(
            "tags", postgresql.ARRAY(sa.Text()), nullable=False, server_default="{}"
        ),
        sa.Column("author_handle", sa.String(255), nullable=False),
        sa.Column("author_name", sa.String(255), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "liked_by",
            postgresql.ARRAY(sa.String(255)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("comments_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("views >= 0", name="article_views_non_negative"),
        sa.CheckConstraint("likes >= 0", name="article_likes_non_negative"),
    )
    op.create_index(
        "idx_articles_created_at", "articles", [sa.text("created_at DESC")]
    )
    op.create_index("idx_articles_category", "articles", ["category"])
    op.create_index("idx_articles_author_handle", "articles", ["author_handle"])

    # ========================================================================
    # PUBLIC_CHARACTERS table
    # ========================================================================
    op.create_table(
        "public_characters",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "tags", postgresql.ARRAY(sa.Text()), nullable=False, server_default="{}"
        ),
        sa.Column("uploader_handle", sa.String(255), nullable=False),
        sa.Column("uploader_name", sa.String(255), nullable=False),
        sa.Column(
            "character_data",
            postgresql.JSONB(),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("avatar", sa.String(255), nullable=False),
        sa.Column("downloads", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "uploaded_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_public_characters_uploaded_at",
        "public_characters",
        [sa.text("uploaded_at DESC")],
    )
    op.create_index(
        "idx_public_characters_uploader_handle",
        "public_characters",
        ["uploader_handle"],
    )

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("target_id", sa.String(64), nullable=False),
        sa.Column(
            "target_type",
            postgresql.ENUM(
                "article", "character", name="comment_target_type", create_type=False
            ),
            nullable=False,
        ),
        # Replies reference their parent without a foreign key
        sa.Column("parent_id", sa.String(64), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_handle", sa.String(255), nullable=False),
        sa.Column("author_name", sa.String(255), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "liked_by",
            postgresql.ARRAY(sa.String(255)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_comments_target", "comments", ["target_type", "target_id"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_created_at", "comments", ["created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comments_created_at", table_name="comments")
    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_index("idx_comments_target", table_name="comments")
    op.drop_table("comments")

    op.drop_index(
        "idx_public_characters_uploader_handle", table_name="public_characters"
    )
    op.drop_index("idx_public_characters_uploaded_at", table_name="public_characters")
    op.drop_table("public_characters")

    op.drop_index("idx_articles_author_handle", table_name="articles")
    op.drop_index("idx_articles_category", table_name="articles")
    op.drop_index("idx_articles_created_at", table_name="articles")
    op.drop_table("articles")

    op.execute("DROP TYPE IF EXISTS comment_target_type")

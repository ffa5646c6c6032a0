"""initial_schema

Create the schema for Ziora:
- Users (read for dashboard statistics)
- Content documents (one row per subject, buckets keyed by content type)
- Comments (flat threaded store with parent/root links and vote sets)

Revision ID: 3c1f9a7e5d20
Revises:
Create Date: 2026-09-28 10:12:44.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7e5d20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
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
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column(
            "status", sa.String(20), nullable=False, server_default="active"
        ),  # 'active', 'suspended', 'deleted'
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint(
            "status IN ('active', 'suspended', 'deleted')", name="check_user_status"
        ),
    )
    op.create_index("idx_users_created_at", "users", ["created_at"])

    # ========================================================================
    # CONTENT_DOCUMENTS table
    # ========================================================================
    op.create_table(
        "content_documents",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("year", sa.String(100), nullable=False),
        sa.Column("semester", sa.String(100), nullable=False),
        sa.Column("branch", sa.String(100), nullable=False),
        sa.Column("subject", sa.String(100), nullable=False),
        sa.Column(
            "buckets",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "year",
            "semester",
            "branch",
            "subject",
            name="uq_content_documents_subject",
        ),
        sa.CheckConstraint("version >= 1", name="check_version_positive"),
    )

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("root_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),  # NULL for top-level
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("author", sa.String(200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("moderation_reason", sa.Text(), nullable=True),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("dislikes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "liked_by",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        sa.Column(
            "disliked_by",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        sa.Column("year", sa.String(100), nullable=True),
        sa.Column("semester", sa.String(100), nullable=True),
        sa.Column("branch", sa.String(100), nullable=True),
        sa.Column("subject", sa.String(100), nullable=False),
        sa.Column("module", sa.String(255), nullable=False),
        sa.Column("content_type", sa.String(100), nullable=False),
        sa.Column("content_id", sa.String(255), nullable=True),  # Module or topic ID
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("user_email", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'flagged')",
            name="check_comment_status",
        ),
        sa.CheckConstraint(
            "likes >= 0 AND dislikes >= 0", name="check_votes_non_negative"
        ),
        sa.CheckConstraint("depth >= 0", name="check_depth_non_negative"),
    )
    op.create_index("idx_comments_root_id", "comments", ["root_id"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index(
        "idx_comments_content", "comments", ["content_type", "subject", "content_id"]
    )
    op.create_index(
        "idx_comments_created_at", "comments", [sa.text("created_at DESC")]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("comments")
    op.drop_table("content_documents")
    op.drop_table("users")

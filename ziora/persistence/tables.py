"""SQLAlchemy table definitions for Ziora.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the signup flow, read for dashboard statistics)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=True),
    Column("status", String(20), nullable=False, server_default="active"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "status IN ('active', 'suspended', 'deleted')", name="check_user_status"
    ),
)

Index("idx_users_created_at", users_table.c.created_at)

# ============================================================================
# CONTENT DOCUMENTS TABLE (one row per year/semester/branch/subject)
# ============================================================================
content_documents_table = Table(
    "content_documents",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("year", String(100), nullable=False),
    Column("semester", String(100), nullable=False),
    Column("branch", String(100), nullable=False),
    Column("subject", String(100), nullable=False),
    # {contentType: {"modules": [...]}}
    Column("buckets", JSONB, nullable=False, server_default="{}"),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "year", "semester", "branch", "subject", name="uq_content_documents_subject"
    ),
    CheckConstraint("version >= 1", name="check_version_positive"),
)

# ============================================================================
# COMMENTS TABLE (flat threads: parent_id + root_id)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("root_id", UUID, nullable=False),
    Column(
        "parent_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("author", String(200), nullable=False),
    Column("content", Text, nullable=False),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("moderation_reason", Text, nullable=True),
    Column("likes", Integer, nullable=False, server_default="0"),
    Column("dislikes", Integer, nullable=False, server_default="0"),
    Column("liked_by", ARRAY(Text), nullable=False, server_default="{}"),
    Column("disliked_by", ARRAY(Text), nullable=False, server_default="{}"),
    Column("year", String(100), nullable=True),
    Column("semester", String(100), nullable=True),
    Column("branch", String(100), nullable=True),
    Column("subject", String(100), nullable=False),
    Column("module", String(255), nullable=False),
    Column("content_type", String(100), nullable=False),
    Column("content_id", String(255), nullable=True),
    Column("user_id", String(255), nullable=True),
    Column("user_email", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "status IN ('pending', 'approved', 'rejected', 'flagged')",
        name="check_comment_status",
    ),
    CheckConstraint("likes >= 0 AND dislikes >= 0", name="check_votes_non_negative"),
    CheckConstraint("depth >= 0", name="check_depth_non_negative"),
)

Index("idx_comments_root_id", comments_table.c.root_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index(
    "idx_comments_content",
    comments_table.c.content_type,
    comments_table.c.subject,
    comments_table.c.content_id,
)
Index("idx_comments_created_at", comments_table.c.created_at.desc())

"""Discussion schema: users_profile, threads, messages, discussion_participants.

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=nullable,
    )


def upgrade() -> None:
    op.create_table(
        "users_profile",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("fullname", sa.Text, nullable=True),
        sa.Column("avatar_url", sa.Text, nullable=True),
        _timestamp("created_at"),
        sa.UniqueConstraint("user_id", name="uq_users_profile_user_id"),
    )

    op.create_table(
        "threads",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("creator_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("status", sa.Text, nullable=False, server_default="active"),
        _timestamp("created_at"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("event_id", name="uq_threads_event_id"),
        sa.CheckConstraint(
            "status IN ('active', 'closed', 'archived')", name="ck_threads_status"
        ),
    )
    op.create_index("ix_threads_creator_id", "threads", ["creator_id"])
    op.create_index("ix_threads_status", "threads", ["status"])

    op.create_table(
        "messages",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "thread_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("threads.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("sender_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("type", sa.Text, nullable=False, server_default="discussion"),
        _timestamp("created_at"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("type IN ('discussion', 'ai')", name="ck_messages_type"),
        sa.CheckConstraint(
            "length(content) <= 1000", name="ck_messages_content_length"
        ),
    )
    op.create_index(
        "ix_messages_thread_id_created_at", "messages", ["thread_id", "created_at"]
    )
    op.create_index("ix_messages_sender_id", "messages", ["sender_id"])

    op.create_table(
        "discussion_participants",
        sa.Column(
            "thread_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("threads.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), primary_key=True),
        _timestamp("joined_at", nullable=True),
        _timestamp("updated_at", nullable=True),
    )
    op.create_index(
        "ix_discussion_participants_user_id", "discussion_participants", ["user_id"]
    )


def downgrade() -> None:
    op.drop_index(
        "ix_discussion_participants_user_id", table_name="discussion_participants"
    )
    op.drop_table("discussion_participants")
    op.drop_index("ix_messages_sender_id", table_name="messages")
    op.drop_index("ix_messages_thread_id_created_at", table_name="messages")
    op.drop_table("messages")
    op.drop_index("ix_threads_status", table_name="threads")
    op.drop_index("ix_threads_creator_id", table_name="threads")
    op.drop_table("threads")
    op.drop_table("users_profile")

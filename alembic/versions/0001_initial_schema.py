"""Initial schema: vendor categories, vendors, message log and AI actions

Revision ID: 0001
Revises:
Create Date: 2024-06-01 09:00:00
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "vendor_categories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("budget", sa.Float(), server_default="0", nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("selected_vendor_id", sa.String(36), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "vendors",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "category_id",
            sa.String(36),
            sa.ForeignKey("vendor_categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("contact_email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("price", sa.Float(), server_default="0", nullable=False),
        sa.Column("status", sa.String(20), server_default="uncontacted", nullable=False),
        sa.Column("last_contact", sa.Date(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_vendors_category_id", "vendors", ["category_id"])
    op.create_index("ix_vendors_name", "vendors", ["name"])
    op.create_index("ix_vendors_status", "vendors", ["status"])

    # Added after vendors exists; the two tables reference each other
    with op.batch_alter_table("vendor_categories") as batch:
        batch.create_foreign_key(
            "fk_vendor_categories_selected_vendor_id",
            "vendors",
            ["selected_vendor_id"],
            ["id"],
            ondelete="SET NULL",
        )

    op.create_table(
        "ai_conversations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "vendor_id",
            sa.String(36),
            sa.ForeignKey("vendors.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("message_type", sa.String(10), nullable=False),
        sa.Column("subject", sa.String(255), nullable=True),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("sent_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_ai_conversations_vendor_id", "ai_conversations", ["vendor_id"])

    op.create_table(
        "ai_actions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "vendor_id",
            sa.String(36),
            sa.ForeignKey("vendors.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("action_type", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("requires_human_input", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("input_needed", sa.Text(), nullable=True),
        sa.Column("completed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_ai_actions_vendor_id", "ai_actions", ["vendor_id"])
    op.create_index("ix_ai_actions_completed", "ai_actions", ["completed"])


def downgrade() -> None:
    op.drop_table("ai_actions")
    op.drop_table("ai_conversations")
    with op.batch_alter_table("vendor_categories") as batch:
        batch.drop_constraint("fk_vendor_categories_selected_vendor_id", type_="foreignkey")
    op.drop_table("vendors")
    op.drop_table("vendor_categories")

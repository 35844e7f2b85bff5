"""initial_schema

Create the schema for the Homestead rental backend:
- Users and properties (read by this service)
- Chats (two-party, optionally scoped to a property) and messages
- Rentals
- Rental invites (short redeemable codes)

Revision ID: 3c1f9a27d4e0
Revises:
Create Date: 2025-11-14 09:12:36.118204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f9a27d4e0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # ========================================================================
    # PROPERTIES table
    # ========================================================================
    op.create_table(
        "properties",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("location", sa.Text(), nullable=False, server_default=""),
        sa.Column("price", sa.Float(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_properties_owner_id", "properties", ["owner_id"])

    # ========================================================================
    # CHATS table
    # ========================================================================
    op.create_table(
        "chats",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_a_id", sa.Integer(), nullable=False),
        sa.Column("user_b_id", sa.Integer(), nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["user_a_id"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["user_b_id"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(
            ["property_id"], ["properties.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("user_a_id < user_b_id", name="chat_participants_ordered"),
    )
    op.create_index("idx_chats_user_a_id", "chats", ["user_a_id"])
    op.create_index("idx_chats_user_b_id", "chats", ["user_b_id"])
    # NULL property_id never collides in a plain unique index, so the
    # unscoped chat gets its own partial index
    op.create_index(
        "idx_chats_unique_pair",
        "chats",
        ["user_a_id", "user_b_id"],
        unique=True,
        postgresql_where=sa.text("property_id IS NULL"),
    )
    op.create_index(
        "idx_chats_unique_pair_property",
        "chats",
        ["user_a_id", "user_b_id", "property_id"],
        unique=True,
        postgresql_where=sa.text("property_id IS NOT NULL"),
    )

    # ========================================================================
    # MESSAGES table
    # ========================================================================
    op.create_table(
        "messages",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("chat_id", sa.Integer(), nullable=False),
        sa.Column("sender_id", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "sent_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["chat_id"], ["chats.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "length(btrim(content)) > 0", name="message_content_not_blank"
        ),
    )
    op.create_index(
        "idx_messages_chat_id_sent_at", "messages", ["chat_id", "sent_at"]
    )

    # ========================================================================
    # RENTALS table
    # ========================================================================
    op.create_table(
        "rentals",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("borrower_id", sa.Integer(), nullable=True),
        sa.Column("start_date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("next_due_date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("rent_amount", sa.Float(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.ForeignKeyConstraint(
            ["property_id"], ["properties.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["borrower_id"], ["users.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("rent_amount > 0", name="rent_amount_positive"),
    )
    op.create_index("idx_rentals_property_id", "rentals", ["property_id"])
    op.create_index("idx_rentals_borrower_id", "rentals", ["borrower_id"])

    # ========================================================================
    # RENTAL_INVITES table
    # ========================================================================
    op.create_table(
        "rental_invites",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("rental_id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(64), nullable=False),
        sa.Column("inviter_id", sa.Integer(), nullable=False),
        sa.Column("invitee_email", sa.String(255), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("accepted_by", sa.Integer(), nullable=True),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["rental_id"], ["rentals.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["inviter_id"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["accepted_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code", name="uq_rental_invites_code"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted')", name="invite_status_valid"
        ),
    )
    op.create_index("idx_rental_invites_rental_id", "rental_invites", ["rental_id"])


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("rental_invites")
    op.drop_table("rentals")
    op.drop_table("messages")
    op.drop_table("chats")
    op.drop_table("properties")
    op.drop_table("users")

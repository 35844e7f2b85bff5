"""SQLAlchemy table definitions for Homestead.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the accounts service, read here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("role", String(20), nullable=False, server_default="user"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# PROPERTIES TABLE (owned by the listings service, read here)
# ============================================================================
properties_table = Table(
    "properties",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "owner_id", Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    ),
    Column("title", String(300), nullable=False),
    Column("location", Text, nullable=False, server_default=""),
    Column("price", Float, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_properties_owner_id", properties_table.c.owner_id)

# ============================================================================
# CHATS TABLE
# ============================================================================
chats_table = Table(
    "chats",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_a_id", Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    ),
    Column(
        "user_b_id", Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    ),
    Column(
        "property_id",
        Integer,
        ForeignKey("properties.id", ondelete="RESTRICT"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("user_a_id < user_b_id", name="chat_participants_ordered"),
)

Index("idx_chats_user_a_id", chats_table.c.user_a_id)
Index("idx_chats_user_b_id", chats_table.c.user_b_id)

# One unscoped chat per pair, and one chat per pair and property
Index(
    "idx_chats_unique_pair",
    chats_table.c.user_a_id,
    chats_table.c.user_b_id,
    unique=True,
    postgresql_where=chats_table.c.property_id.is_(None),
)
Index(
    "idx_chats_unique_pair_property",
    chats_table.c.user_a_id,
    chats_table.c.user_b_id,
    chats_table.c.property_id,
    unique=True,
    postgresql_where=chats_table.c.property_id.is_not(None),
)

# ============================================================================
# MESSAGES TABLE
# ============================================================================
messages_table = Table(
    "messages",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "chat_id", Integer, ForeignKey("chats.id", ondelete="RESTRICT"), nullable=False
    ),
    Column(
        "sender_id", Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    ),
    Column("content", Text, nullable=False),
    Column("sent_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"),
    CheckConstraint("length(btrim(content)) > 0", name="message_content_not_blank"),
)

Index("idx_messages_chat_id_sent_at", messages_table.c.chat_id, messages_table.c.sent_at)

# ============================================================================
# RENTALS TABLE
# ============================================================================
rentals_table = Table(
    "rentals",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "property_id",
        Integer,
        ForeignKey("properties.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column(
        "borrower_id", Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=True
    ),
    Column("start_date", TIMESTAMP(timezone=True), nullable=False),
    Column("next_due_date", TIMESTAMP(timezone=True), nullable=False),
    Column("rent_amount", Float, nullable=False),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    CheckConstraint("rent_amount > 0", name="rent_amount_positive"),
)

Index("idx_rentals_property_id", rentals_table.c.property_id)
Index("idx_rentals_borrower_id", rentals_table.c.borrower_id)

# ============================================================================
# RENTAL INVITES TABLE
# ============================================================================
rental_invites_table = Table(
    "rental_invites",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "rental_id",
        Integer,
        ForeignKey("rentals.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("code", String(64), nullable=False, unique=True),
    Column(
        "inviter_id", Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    ),
    Column("invitee_email", String(255), nullable=True),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "accepted_by", Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("status IN ('pending', 'accepted')", name="invite_status_valid"),
)

Index("idx_rental_invites_rental_id", rental_invites_table.c.rental_id)

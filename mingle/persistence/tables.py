"""SQLAlchemy table definitions for Mingle.

These Core tables are mapped to domain models by hand (see mappers.py).
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    Enum,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# User ids are issued by the external auth service and stored as opaque strings

# ============================================================================
# USER PROFILES TABLE
# ============================================================================
user_profiles_table = Table(
    "user_profiles",
    metadata,
    Column("user_id", String(255), primary_key=True),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("username", String(255), nullable=True),
    Column("email", String(320), nullable=True),  # Stored lower-cased
    Column("profile_photo_key", String(1024), nullable=True),
    Column("profile_photo_url", Text, nullable=True),  # Legacy presigned URLs
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_user_profiles_email", user_profiles_table.c.email)

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("inviter_id", String(255), nullable=False),
    Column("inviter_name", String(255), nullable=False),
    Column("inviter_avatar", String(1024), nullable=True),  # Storage key
    Column("recipient_email", String(320), nullable=False),
    Column("recipient_name", String(255), nullable=True),
    Column("message", Text, nullable=True),
    Column(
        "status",
        Enum(
            "pending",
            "accepted",
            "declined",
            "cancelled",
            "expired",
            "registered",
            name="invitation_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column("sent_at", TIMESTAMP(timezone=True), nullable=False),
    Column("message_id", String(255), nullable=True),
    Column("delivery_method", String(32), nullable=True),
    Column("friend_id", String(255), nullable=True),
    Column("responded_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_invitations_inviter_id", invitations_table.c.inviter_id)
Index(
    "idx_invitations_recipient_status",
    invitations_table.c.recipient_email,
    invitations_table.c.status,
)
Index("idx_invitations_status_sent_at", invitations_table.c.status, invitations_table.c.sent_at)

# Only one pending invitation per (inviter, recipient)
Index(
    "idx_invitations_unique_pending",
    invitations_table.c.inviter_id,
    invitations_table.c.recipient_email,
    unique=True,
    postgresql_where=invitations_table.c.status == "pending",
)

# ============================================================================
# CONNECTIONS TABLE
# ============================================================================
connections_table = Table(
    "connections",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("inviter_id", String(255), nullable=False),  # Edge source
    Column("friend_id", String(255), nullable=False),  # Edge target
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("inviter_id", "friend_id", name="uq_connection_edge"),
)

Index("idx_connections_inviter_id", connections_table.c.inviter_id)

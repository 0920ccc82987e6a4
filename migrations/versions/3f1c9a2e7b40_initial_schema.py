"""initial_schema

Create the schema for Mingle:
- User profiles (display names and avatar keys, keyed by auth-service user id)
- Invitations (email invitations with a status state machine)
- Connections (directed friend edges, written in pairs)

Revision ID: 3f1c9a2e7b40
Revises:
Create Date: 2026-10-19 10:12:44.318520

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2e7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invitation_status AS ENUM (
                'pending', 'accepted', 'declined', 'cancelled', 'expired', 'registered'
            );
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USER_PROFILES table
    # ========================================================================
    op.create_table(
        "user_profiles",
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("profile_photo_key", sa.String(1024), nullable=True),
        sa.Column("profile_photo_url", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("user_id"),
    )
    op.create_index("idx_user_profiles_email", "user_profiles", ["email"])

    # ========================================================================
    # INVITATIONS table
    # ========================================================================
    op.create_table(
        "invitations",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("inviter_id", sa.String(255), nullable=False),
        sa.Column("inviter_name", sa.String(255), nullable=False),
        sa.Column("inviter_avatar", sa.String(1024), nullable=True),
        sa.Column("recipient_email", sa.String(320), nullable=False),
        sa.Column("recipient_name", sa.String(255), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(
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
        sa.Column("sent_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("message_id", sa.String(255), nullable=True),
        sa.Column("delivery_method", sa.String(32), nullable=True),
        sa.Column("friend_id", sa.String(255), nullable=True),
        sa.Column("responded_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_invitations_inviter_id", "invitations", ["inviter_id"])
    op.create_index(
        "idx_invitations_recipient_status", "invitations", ["recipient_email", "status"]
    )
    op.create_index(
        "idx_invitations_status_sent_at", "invitations", ["status", "sent_at"]
    )
    # Only one pending invitation per (inviter, recipient)
    op.create_index(
        "idx_invitations_unique_pending",
        "invitations",
        ["inviter_id", "recipient_email"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )

    # ========================================================================
    # CONNECTIONS table
    # ========================================================================
    op.create_table(
        "connections",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("inviter_id", sa.String(255), nullable=False),
        sa.Column("friend_id", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("inviter_id", "friend_id", name="uq_connection_edge"),
    )
    op.create_index("idx_connections_inviter_id", "connections", ["inviter_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_connections_inviter_id", table_name="connections")
    op.drop_table("connections")

    op.drop_index("idx_invitations_unique_pending", table_name="invitations")
    op.drop_index("idx_invitations_status_sent_at", table_name="invitations")
    op.drop_index("idx_invitations_recipient_status", table_name="invitations")
    op.drop_index("idx_invitations_inviter_id", table_name="invitations")
    op.drop_table("invitations")

    op.drop_index("idx_user_profiles_email", table_name="user_profiles")
    op.drop_table("user_profiles")

    op.execute("DROP TYPE IF EXISTS invitation_status")

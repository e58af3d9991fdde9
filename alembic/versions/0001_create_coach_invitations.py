"""create_coach_invitations

Revision ID: 0001_coach_invitations
Revises:
Create Date: 2026-10-19 09:12:40.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_coach_invitations"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "coach_invitations",
        sa.Column("id", sa.String(length=64), nullable=False, comment="Invitation ID"),
        sa.Column(
            "athlete_id",
            sa.String(length=128),
            nullable=False,
            comment="Identity of the inviting athlete",
        ),
        sa.Column("athlete_name", sa.String(length=255), nullable=True),
        sa.Column("coach_email", sa.String(length=255), nullable=True),
        sa.Column("folder_id", sa.String(length=128), nullable=True),
        sa.Column("folder_name", sa.String(length=255), nullable=True),
        sa.Column("can_upload", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("can_comment", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("can_delete", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        # Delivery status, NULL until the first send attempt
        sa.Column("email_sent", sa.Boolean(), nullable=True),
        sa.Column("email_sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("email_resent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("email_error", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_coach_invitations_athlete_id", "coach_invitations", ["athlete_id"], unique=False
    )
    op.create_index(
        "ix_coach_invitations_coach_email", "coach_invitations", ["coach_email"], unique=False
    )
    op.create_index(
        "ix_coach_invitations_athlete_created",
        "coach_invitations",
        ["athlete_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_coach_invitations_athlete_created", table_name="coach_invitations")
    op.drop_index("ix_coach_invitations_coach_email", table_name="coach_invitations")
    op.drop_index("ix_coach_invitations_athlete_id", table_name="coach_invitations")
    op.drop_table("coach_invitations")

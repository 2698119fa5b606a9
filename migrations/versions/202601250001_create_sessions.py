"""Store login sessions server side."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202601250001_create_sessions"
down_revision = "202601200001_create_task_comments"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "sessions",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("userId", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("createdAt", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("expiresAt", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["userId"], ["users.id"], name="fk_sessions_user_id", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sessions_userId", "sessions", ["userId"])
    op.create_index("ix_sessions_expiresAt", "sessions", ["expiresAt"])


def downgrade():
    op.drop_index("ix_sessions_expiresAt", table_name="sessions")
    op.drop_index("ix_sessions_userId", table_name="sessions")
    op.drop_table("sessions")

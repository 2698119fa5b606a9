"""Create the task_comments table."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202601200001_create_task_comments"
down_revision = "202601150001_rbac"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "task_comments",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("taskId", sa.String(length=36), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("createdBy", sa.String(length=36), nullable=False),
        sa.Column("createdAt", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("lastUpdatedBy", sa.String(length=36), nullable=False),
        sa.Column("lastUpdatedAt", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(
            ["taskId"], ["tasks.id"], name="fk_task_comments_task_id", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["createdBy"], ["users.id"], name="fk_task_comments_created_by", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["lastUpdatedBy"], ["users.id"], name="fk_task_comments_last_updated_by", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("comment_task_index", "task_comments", ["taskId"])


def downgrade():
    op.drop_index("comment_task_index", table_name="task_comments")
    op.drop_table("task_comments")

"""Create the tasks table."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202601120001_create_tasks"
down_revision = "202601100002_create_projects"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "tasks",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("projectId", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("summary", sa.String(length=500), nullable=True),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("createdBy", sa.String(length=36), nullable=False),
        sa.Column("createdAt", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("lastUpdatedBy", sa.String(length=36), nullable=False),
        sa.Column("lastUpdatedAt", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(
            ["projectId"], ["projects.id"], name="fk_tasks_project_id", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["createdBy"], ["users.id"], name="fk_tasks_created_by", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["lastUpdatedBy"], ["users.id"], name="fk_tasks_last_updated_by", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tasks_projectId", "tasks", ["projectId"])
    op.create_index("ix_tasks_title", "tasks", ["title"])


def downgrade():
    op.drop_index("ix_tasks_title", table_name="tasks")
    op.drop_index("ix_tasks_projectId", table_name="tasks")
    op.drop_table("tasks")

"""Create the projects table."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202601100002_create_projects"
down_revision = "202601100001_create_users"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "projects",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("createdBy", sa.String(length=36), nullable=False),
        sa.Column("createdAt", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("lastUpdatedBy", sa.String(length=36), nullable=False),
        sa.Column("lastUpdatedAt", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(
            ["createdBy"], ["users.id"], name="fk_projects_created_by", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["lastUpdatedBy"], ["users.id"], name="fk_projects_last_updated_by", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_name", "projects", ["name"], unique=True)


def downgrade():
    op.drop_index("ix_projects_name", table_name="projects")
    op.drop_table("projects")

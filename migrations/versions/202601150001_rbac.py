"""Add user roles and project memberships.

Every existing project creator becomes the ADMIN member of the project.
"""
from __future__ import annotations

from datetime import datetime
import uuid

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202601150001_rbac"
down_revision = "202601120001_create_tasks"
branch_labels = None
depends_on = None


project_members_table = sa.Table(
    "project_members",
    sa.MetaData(),
    sa.Column("id", sa.String(length=36)),
    sa.Column("projectId", sa.String(length=36)),
    sa.Column("userId", sa.String(length=36)),
    sa.Column("role", sa.String(length=20)),
    sa.Column("createdAt", sa.DateTime),
    sa.Column("lastUpdatedAt", sa.DateTime),
)


def upgrade():
    with op.batch_alter_table("users") as batch_op:
        batch_op.add_column(
            sa.Column("role", sa.String(length=20), nullable=False, server_default="USER")
        )

    op.create_table(
        "project_members",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("projectId", sa.String(length=36), nullable=False),
        sa.Column("userId", sa.String(length=36), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="USER"),
        sa.Column("createdAt", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("lastUpdatedAt", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(
            ["projectId"], ["projects.id"], name="fk_project_members_project_id", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["userId"], ["users.id"], name="fk_project_members_user_id", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("projectId", "userId", name="uq_project_user"),
    )
    op.create_index("ix_project_members_projectId", "project_members", ["projectId"])
    op.create_index("ix_project_members_userId", "project_members", ["userId"])

    connection = op.get_bind()
    projects_table = sa.Table(
        "projects",
        sa.MetaData(),
        sa.Column("id", sa.String(length=36)),
        sa.Column("createdBy", sa.String(length=36)),
    )
    projects = connection.execute(
        sa.select(projects_table.c.id, projects_table.c.createdBy)
    ).fetchall()
    if projects:
        now = datetime.utcnow()
        connection.execute(
            sa.insert(project_members_table),
            [
                {
                    "id": str(uuid.uuid4()),
                    "projectId": project_id,
                    "userId": created_by,
                    "role": "ADMIN",
                    "createdAt": now,
                    "lastUpdatedAt": now,
                }
                for project_id, created_by in projects
            ],
        )


def downgrade():
    op.drop_index("ix_project_members_userId", table_name="project_members")
    op.drop_index("ix_project_members_projectId", table_name="project_members")
    op.drop_table("project_members")
    with op.batch_alter_table("users") as batch_op:
        batch_op.drop_column("role")

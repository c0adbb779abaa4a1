"""Create users table.

Revision ID: 001_users
Revises:
Create Date: 2026-10-18

Adds:
- userrole / userstatus enum types
- users table with unique firebase_uid and email
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "001_users"
down_revision = None
branch_labels = None
depends_on = None

USER_ROLES = (
    "AGENCY_ADMIN",
    "EMPLOYEE",
    "GUARDIAN",
    "CASE_MANAGER",
    "CLIENT",
    "PROVIDER",
    "SUPERVISOR",
)
USER_STATUSES = ("PENDING", "ACTIVE", "SUSPENDED")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("firebase_uid", sa.String(), nullable=True),
        sa.Column("password_hash", sa.String(), nullable=True),
        sa.Column(
            "role",
            sa.Enum(*USER_ROLES, name="userrole"),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum(*USER_STATUSES, name="userstatus"),
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column("agency_id", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_firebase_uid", "users", ["firebase_uid"], unique=True)
    op.create_index("ix_users_agency_id", "users", ["agency_id"])


def downgrade() -> None:
    op.drop_index("ix_users_agency_id", table_name="users")
    op.drop_index("ix_users_firebase_uid", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS userstatus")
    op.execute("DROP TYPE IF EXISTS userrole")

"""Users, employees and activity log.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("first_name", sa.Text, nullable=False),
        sa.Column("last_name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column(
            "role", sa.Text, nullable=False, server_default=sa.text("'Viewer'")
        ),
        sa.Column(
            "permissions",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "settings",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("position", sa.Text, nullable=True),
        sa.Column("photo", sa.Text, nullable=True),
        sa.Column(
            "force_password_change",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('Administrator', 'Manager', 'Viewer')", name="users_role"
        ),
    )
    op.create_index("uq_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_created_at", "users", ["created_at"])

    op.create_table(
        "employees",
        sa.Column("id", sa.String(24), primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("employee_id", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=True),
        sa.Column("mobile", sa.Text, nullable=True),
        sa.Column("position", sa.Text, nullable=True),
        sa.Column("department", sa.Text, nullable=True),
        sa.Column("company", sa.Text, nullable=True),
        sa.Column("office_location", sa.Text, nullable=True),
        sa.Column(
            "status", sa.Text, nullable=False, server_default=sa.text("'Active'")
        ),
        sa.Column("qr_code", sa.Text, nullable=True),
        sa.Column("id_card_expiration_date", sa.Date, nullable=True),
        sa.Column("photo", sa.Text, nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('Active', 'Inactive')", name="employees_status"
        ),
    )
    # Codes are derived from the creation instant and may repeat
    op.create_index("ix_employees_employee_id", "employees", ["employee_id"])
    op.create_index("ix_employees_created_at", "employees", ["created_at"])
    op.create_index("ix_employees_company", "employees", ["company"])
    op.create_index("ix_employees_status", "employees", ["status"])

    op.create_table(
        "activities",
        sa.Column("id", sa.String(24), primary_key=True),
        # Weak reference: activity survives the deletion of its actor
        sa.Column("user_id", sa.String(24), nullable=True),
        sa.Column("action", sa.Text, nullable=False),
        sa.Column("target", sa.Text, nullable=True),
        sa.Column("target_id", sa.String(24), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index("ix_activities_created_at", "activities", ["created_at"])
    op.create_index("ix_activities_user_id", "activities", ["user_id"])
    op.create_index("ix_activities_action", "activities", ["action"])


def downgrade() -> None:
    op.drop_table("activities")
    op.drop_table("employees")
    op.drop_table("users")

"""create users and admissions tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("CREATE TYPE user_role AS ENUM ('student', 'teacher', 'admin')")
    op.execute("CREATE TYPE admission_status AS ENUM ('active', 'pending', 'inactive', 'completed')")

    op.create_table(
        "users",
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("role", postgresql.ENUM("student", "teacher", "admin",
                  name="user_role", create_type=False), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_role"), "users", ["role"], unique=False)
    op.create_index(op.f("ix_users_is_active"), "users", ["is_active"], unique=False)

    op.create_table(
        "admissions",
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("guardian_name", sa.String(255), nullable=True),
        sa.Column("class", sa.String(100), nullable=False),
        sa.Column("batch", sa.String(100), nullable=False),
        sa.Column("status", postgresql.ENUM("active", "pending", "inactive", "completed",
                  name="admission_status", create_type=False), nullable=False),
        sa.Column("admission_date", sa.DateTime(), nullable=False),
        sa.Column("monthly_fee", sa.Numeric(10, 2), nullable=False),
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_admissions_id"), "admissions", ["id"], unique=False)
    op.create_index(op.f("ix_admissions_class"), "admissions", ["class"], unique=False)
    op.create_index(op.f("ix_admissions_batch"), "admissions", ["batch"], unique=False)
    op.create_index(op.f("ix_admissions_status"), "admissions", ["status"], unique=False)
    op.create_index(op.f("ix_admissions_admission_date"), "admissions", ["admission_date"], unique=False)


def downgrade() -> None:
    op.drop_table("admissions")
    op.drop_table("users")
    op.execute("DROP TYPE admission_status")
    op.execute("DROP TYPE user_role")

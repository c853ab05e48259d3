"""create students table

Revision ID: 3b1f6c2a9d40
Revises:
Create Date: 2026-10-19 10:12:41.218305

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b1f6c2a9d40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "students",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("registration_no", sa.String(length=13), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("class", sa.String(length=30), nullable=False),
        sa.Column("roll_no", sa.Integer(), nullable=False),
        sa.Column("contact_number", sa.String(length=10), nullable=False),
        sa.Column(
            "status", sa.Boolean(), nullable=False, server_default=sa.text("TRUE")
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.UniqueConstraint("class", "roll_no", name="uq_students_class_roll_no"),
    )
    op.create_index(
        "ix_students_registration_no", "students", ["registration_no"], unique=True
    )
    # paginated listing orders by name
    op.create_index("ix_students_name", "students", ["name"])


def downgrade() -> None:
    op.drop_index("ix_students_name", table_name="students")
    op.drop_index("ix_students_registration_no", table_name="students")
    op.drop_table("students")

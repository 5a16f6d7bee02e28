"""Initial schema — budgets table with embedded categories and expenses.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "budgets",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("month", sa.String(7), nullable=False),
        sa.Column("name", sa.String(200), nullable=False, server_default=""),
        sa.Column("income", sa.Float, nullable=False, server_default="0"),
        sa.Column("categories", sa.JSON, nullable=False),
        sa.Column("expenses", sa.JSON, nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_budgets_month", "budgets", ["month"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_budgets_month", table_name="budgets")
    op.drop_table("budgets")

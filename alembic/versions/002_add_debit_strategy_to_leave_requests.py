"""Add debit_strategy to leave_requests

Revision ID: 002_debit_strategy
Revises: 001_initial_schema
Create Date: 2026-10-18

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002_debit_strategy"
down_revision: Union[str, None] = "001_initial_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    cols = [c["name"] for c in sa.inspect(bind).get_columns("leave_requests")]
    if "debit_strategy" in cols:
        return
    # Requests that predate the column were submitted under the default ON_APPROVE
    op.add_column(
        "leave_requests",
        sa.Column("debit_strategy", sa.String(20), nullable=False, server_default="ON_APPROVE"),
    )


def downgrade() -> None:
    with op.batch_alter_table("leave_requests") as batch_op:
        batch_op.drop_column("debit_strategy")

"""visit_logs and stats_users

Revision ID: 4c1f0a9e2b7d
Revises:
Create Date: 2025-10-24 19:02:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1f0a9e2b7d'
down_revision = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        "visit_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("timezone", sa.String(length=100), nullable=True),
        sa.Column("is_friday", sa.Boolean(), nullable=True),
        sa.Column(
            "forced_mode",
            sa.Enum("friday", "no", name="visit_forced_mode", native_enum=False, create_constraint=True),
            nullable=True,
        ),
        sa.Column("season", sa.String(length=30), nullable=True),
        sa.Column("generated_at", sa.DateTime(), nullable=True),
        sa.Column("remote_addr", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_visit_logs_created_at", "visit_logs", ["created_at"], unique=False)
    op.create_index("ix_visit_logs_timezone", "visit_logs", ["timezone"], unique=False)

    op.create_table(
        "stats_users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=64), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )


def downgrade():
    op.drop_table("stats_users")
    op.drop_index("ix_visit_logs_timezone", table_name="visit_logs")
    op.drop_index("ix_visit_logs_created_at", table_name="visit_logs")
    op.drop_table("visit_logs")

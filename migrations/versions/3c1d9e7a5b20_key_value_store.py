"""Create key_value_store.

One row per well-known key holding a JSON document: the invitation
collection and the pending deep-link slot.

Revision ID: 3c1d9e7a5b20
Revises:
Create Date: 2025-11-04 10:12:44.218305
"""

import sqlalchemy as sa
from alembic import op

revision = "3c1d9e7a5b20"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "key_value_store",
        sa.Column("key", sa.String(255), primary_key=True),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("key_value_store")

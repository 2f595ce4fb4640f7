"""SQLAlchemy table definitions for Twinship.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import Column, DateTime, MetaData, String, Table, Text

metadata = MetaData()

# ============================================================================
# KEY VALUE STORE TABLE
# ============================================================================
# Durable host key-value store. Each well-known key holds one JSON document,
# e.g. the full invitation array under "twinship_invitations".
key_value_store_table = Table(
    "key_value_store",
    metadata,
    Column("key", String(255), primary_key=True),
    Column("value", Text, nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

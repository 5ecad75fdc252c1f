"""create tags table

Revision ID: 0002_create_tags_table
Revises: 0001_create_authors_table
Create Date: 2026-10-18
"""

import sqlalchemy as sa
from alembic import op

revision = "0002_create_tags_table"
down_revision = "0001_create_authors_table"
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "tags",
        sa.Column("id", sa.BigInteger().with_variant(sa.Integer(), "sqlite"), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f("ix_tags_name"), "tags", ["name"], unique=False)

def downgrade():
    op.drop_index(op.f("ix_tags_name"), table_name="tags")
    op.drop_table("tags")

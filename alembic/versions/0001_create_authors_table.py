"""create authors table

Revision ID: 0001_create_authors_table
Revises:
Create Date: 2026-10-18
"""

import sqlalchemy as sa
from alembic import op

revision = "0001_create_authors_table"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "authors",
        sa.Column("id", sa.BigInteger().with_variant(sa.Integer(), "sqlite"), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False, unique=True),
        sa.Column("description", sa.String(length=400), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("link", sa.String(length=400), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index(op.f("ix_authors_name"), "authors", ["name"], unique=False)

def downgrade():
    op.drop_index(op.f("ix_authors_name"), table_name="authors")
    op.drop_table("authors")

"""create quotes table

Revision ID: 0003_create_quotes_table
Revises: 0002_create_tags_table
Create Date: 2026-10-18
"""

import sqlalchemy as sa
from alembic import op

revision = "0003_create_quotes_table"
down_revision = "0002_create_tags_table"
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "quotes",
        sa.Column("id", sa.BigInteger().with_variant(sa.Integer(), "sqlite"), primary_key=True, autoincrement=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "author_id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            sa.ForeignKey("authors.id"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f("ix_quotes_author_id"), "quotes", ["author_id"], unique=False)
    if op.get_context().dialect.name == "postgresql":
        op.execute("CREATE INDEX ix_quotes_content_fts ON quotes USING gin (to_tsvector('simple', content))")

def downgrade():
    if op.get_context().dialect.name == "postgresql":
        op.execute("DROP INDEX IF EXISTS ix_quotes_content_fts")
    op.drop_index(op.f("ix_quotes_author_id"), table_name="quotes")
    op.drop_table("quotes")

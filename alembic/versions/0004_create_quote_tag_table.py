"""create quote_tag table

Revision ID: 0004_create_quote_tag_table
Revises: 0003_create_quotes_table
Create Date: 2026-10-18
"""

import sqlalchemy as sa
from alembic import op

revision = "0004_create_quote_tag_table"
down_revision = "0003_create_quotes_table"
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "quote_tag",
        sa.Column(
            "quote_id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            sa.ForeignKey("quotes.id"),
            primary_key=True,
        ),
        sa.Column(
            "tag_id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            sa.ForeignKey("tags.id"),
            primary_key=True,
        ),
    )
    op.create_index(op.f("ix_quote_tag_tag_id"), "quote_tag", ["tag_id"], unique=False)

def downgrade():
    op.drop_index(op.f("ix_quote_tag_tag_id"), table_name="quote_tag")
    op.drop_table("quote_tag")

"""Add content entry table

Revision ID: 5f2c1a7d9e3b
Revises:
Create Date: 2026-10-19 09:12:44.318207

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
import sqlmodel

revision: str = "5f2c1a7d9e3b"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "contententry",
        sa.Column(
            "title", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False
        ),
        sa.Column("slug", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column(
            "content_type", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False
        ),
        sa.Column("locale", sqlmodel.sql.sqltypes.AutoString(length=35), nullable=False),
        sa.Column("document_id", sa.Uuid(), nullable=False),
        sa.Column("data", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_contententry_slug"), "contententry", ["slug"])
    op.create_index(
        op.f("ix_contententry_content_type"), "contententry", ["content_type"]
    )
    op.create_index(op.f("ix_contententry_locale"), "contententry", ["locale"])
    op.create_index(
        op.f("ix_contententry_document_id"), "contententry", ["document_id"]
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_contententry_document_id"), table_name="contententry")
    op.drop_index(op.f("ix_contententry_locale"), table_name="contententry")
    op.drop_index(op.f("ix_contententry_content_type"), table_name="contententry")
    op.drop_index(op.f("ix_contententry_slug"), table_name="contententry")
    op.drop_table("contententry")

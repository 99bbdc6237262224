"""site_content

Revision ID: 0003_site_content
Revises: 0002_rls
Create Date: 2026-10-19 00:03:00.000000

Per-tenant overrides of the editable site texts, under the same
``tenant_isolation`` policy as the other tenant-scoped tables.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0003_site_content"
down_revision: Union[str, None] = "0002_rls"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


TENANT_SCOPED_TABLES = ("site_content",)

POLICY_EXPRESSION = (
    "current_setting('app.elevated', true) = 'on' "
    "OR tenant_id::text = current_setting('app.current_tenant_id', true)"
)


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "site_content",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.Column("content_key", sa.String(length=64), nullable=False),
        sa.Column("content_value", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "tenant_id", "content_key", name="uq_site_content_tenant_key"
        ),
    )
    op.create_index(op.f("ix_site_content_id"), "site_content", ["id"], unique=False)
    op.create_index(
        op.f("ix_site_content_tenant_id"), "site_content", ["tenant_id"], unique=False
    )

    for table in TENANT_SCOPED_TABLES:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY")
        op.execute(f"ALTER TABLE {table} FORCE ROW LEVEL SECURITY")
        op.execute(
            f"CREATE POLICY tenant_isolation ON {table} "
            f"USING ({POLICY_EXPRESSION}) "
            f"WITH CHECK ({POLICY_EXPRESSION})"
        )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index(op.f("ix_site_content_tenant_id"), table_name="site_content")
    op.drop_index(op.f("ix_site_content_id"), table_name="site_content")
    op.drop_table("site_content")

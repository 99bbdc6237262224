"""enable_row_level_security

Revision ID: 0002_rls
Revises: 0001_initial
Create Date: 2026-10-01 00:02:00.000000

Every tenant-scoped table only exposes rows of the tenant bound to the
transaction (``app.current_tenant_id``) unless the transaction is
elevated (``app.elevated = 'on'``). FORCE applies the policy to the table
owner as well, which is the role the application connects with.
"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0002_rls"
down_revision: Union[str, None] = "0001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


TENANT_SCOPED_TABLES = (
    "profiles",
    "tenant_memberships",
    "animals",
    "user_progress",
    "redemptions",
)

POLICY_EXPRESSION = (
    "current_setting('app.elevated', true) = 'on' "
    "OR tenant_id::text = current_setting('app.current_tenant_id', true)"
)


def upgrade() -> None:
    """Upgrade database schema."""
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
    for table in TENANT_SCOPED_TABLES:
        op.execute(f"DROP POLICY IF EXISTS tenant_isolation ON {table}")
        op.execute(f"ALTER TABLE {table} NO FORCE ROW LEVEL SECURITY")
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY")

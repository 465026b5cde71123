"""create site configuration and environment variable tables

Revision ID: 3f1c9a2b7d4e
Revises:
Create Date: 2026-10-16 12:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "3f1c9a2b7d4e"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
  op.create_table(
    "site_configurations",
    sa.Column("id", sa.String(), nullable=False),
    sa.Column("team_id", sa.String(), nullable=False),
    sa.Column("site_id", sa.String(), nullable=False),
    sa.Column("config", sa.JSON(), nullable=False),
    sa.Column("version", sa.Integer(), nullable=False),
    sa.Column("created_at", sa.DateTime(), nullable=False),
    sa.Column("updated_at", sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint("id"),
    sa.UniqueConstraint("team_id", "site_id", name="uq_site_configurations_team_site"),
  )
  op.create_index(
    "ix_site_configurations_team_id", "site_configurations", ["team_id"]
  )
  op.create_index(
    "ix_site_configurations_site_id", "site_configurations", ["site_id"]
  )

  op.create_table(
    "site_environment_variables",
    sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
    sa.Column("account_id", sa.String(), nullable=False),
    sa.Column("site_id", sa.String(), nullable=False),
    sa.Column("key", sa.String(), nullable=False),
    sa.Column("value", sa.Text(), nullable=False),
    sa.Column("is_secret", sa.Boolean(), nullable=False),
    sa.Column("updated_at", sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint("id"),
    sa.UniqueConstraint(
      "account_id", "site_id", "key", name="uq_site_environment_variables_key"
    ),
  )
  op.create_index(
    "ix_site_environment_variables_account_id",
    "site_environment_variables",
    ["account_id"],
  )
  op.create_index(
    "ix_site_environment_variables_site_id",
    "site_environment_variables",
    ["site_id"],
  )


def downgrade() -> None:
  op.drop_index(
    "ix_site_environment_variables_site_id", table_name="site_environment_variables"
  )
  op.drop_index(
    "ix_site_environment_variables_account_id",
    table_name="site_environment_variables",
  )
  op.drop_table("site_environment_variables")
  op.drop_index("ix_site_configurations_site_id", table_name="site_configurations")
  op.drop_index("ix_site_configurations_team_id", table_name="site_configurations")
  op.drop_table("site_configurations")

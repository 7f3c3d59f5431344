"""create users, owners1, properties and schedule tables

Revision ID: 5e1a7c3b9d20
Revises:
Create Date: 2026-10-17 09:12:44.501233

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5e1a7c3b9d20'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the four tables the portal reads and writes."""
    # Tables may already exist on databases created before migrations were introduced.
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = set(inspector.get_table_names())

    if "users" not in existing_tables:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("username", sa.String(150), nullable=False, unique=True),
            sa.Column("password", sa.String(255), nullable=False),
            sa.Column("role", sa.String(16), nullable=False),
        )

    if "owners1" not in existing_tables:
        op.create_table(
            "owners1",
            sa.Column("owner_id", sa.Integer(), primary_key=True),
            sa.Column("primaryownerfirstname", sa.String(100), nullable=True),
            sa.Column("primaryownerlastname", sa.String(100), nullable=True),
            sa.Column("secondaryownerfirstname", sa.String(100), nullable=True),
            sa.Column("secondaryownerlastname", sa.String(100), nullable=True),
            sa.Column("contact_info", sa.String(255), nullable=True),
            sa.Column("email", sa.String(320), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
        )

    if "properties" not in existing_tables:
        op.create_table(
            "properties",
            sa.Column("property_id", sa.Integer(), primary_key=True),
            sa.Column("property_name", sa.String(255), nullable=False, unique=True),
        )

    if "schedule" not in existing_tables:
        op.create_table(
            "schedule",
            sa.Column("schedule_id", sa.Integer(), primary_key=True),
            sa.Column("property_id", sa.Integer(), sa.ForeignKey("properties.property_id"), nullable=False),
            sa.Column("ownerid", sa.Integer(), sa.ForeignKey("owners1.owner_id"), nullable=False),
            sa.Column("start_date", sa.Date(), nullable=False),
            sa.Column("end_date", sa.Date(), nullable=False),
            sa.Column("status", sa.String(64), nullable=True),
        )
        op.create_index("idx_schedule_property_start", "schedule", ["property_id", "start_date"])


def downgrade() -> None:
    op.drop_index("idx_schedule_property_start", table_name="schedule")
    op.drop_table("schedule")
    op.drop_table("properties")
    op.drop_table("owners1")
    op.drop_table("users")

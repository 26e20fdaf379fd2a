"""create gis_sites table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "gis_sites",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("site_name", sa.String(length=255), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("risk_status", sa.String(length=8), nullable=True),
        sa.Column("site_type", sa.String(length=255), nullable=True),
        sa.Column("authority", sa.String(length=255), nullable=True),
        sa.Column("summer_capacity", sa.Float(), nullable=True),
        sa.Column("winter_capacity", sa.Float(), nullable=True),
        sa.Column("functional_location", sa.String(length=255), nullable=True),
        sa.Column("licence_area", sa.String(length=255), nullable=True),
        sa.Column("power_transformers", sa.String(length=255), nullable=True),
        sa.Column("site_voltage", sa.String(length=120), nullable=True),
        sa.Column("what3words", sa.String(length=255), nullable=True),
        sa.Column("type", sa.String(length=120), nullable=True),
        sa.Column("voltage_transformer_ratings", sa.String(length=255), nullable=True),
        sa.Column("connection_queue", sa.String(length=255), nullable=True),
        sa.Column("uploaded_by", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "risk_status IS NULL OR risk_status IN ('High', 'Low')",
            name="ck_gis_sites_risk_status",
        ),
        sa.CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_gis_sites_latitude"),
        sa.CheckConstraint("longitude BETWEEN -180 AND 180", name="ck_gis_sites_longitude"),
    )
    op.create_index("ix_gis_sites_site_name", "gis_sites", ["site_name"], unique=False)
    op.create_index("ix_gis_sites_uploaded_by", "gis_sites", ["uploaded_by"], unique=False)
    op.create_index("ix_gis_sites_risk_status", "gis_sites", ["risk_status"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_gis_sites_risk_status", table_name="gis_sites")
    op.drop_index("ix_gis_sites_uploaded_by", table_name="gis_sites")
    op.drop_index("ix_gis_sites_site_name", table_name="gis_sites")
    op.drop_table("gis_sites")

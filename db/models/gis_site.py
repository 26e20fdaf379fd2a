"""
db/models/gis_site.py

Uploaded GIS site (substation, transformer, or other grid asset location).
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, Index, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class GisSite(Base):
    __tablename__ = "gis_sites"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    site_name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    risk_status: Mapped[str | None] = mapped_column(
        String(8),
        nullable=True,
        comment="High, Low",
    )
    site_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    authority: Mapped[str | None] = mapped_column(String(255), nullable=True)
    summer_capacity: Mapped[float | None] = mapped_column(Float, nullable=True)
    winter_capacity: Mapped[float | None] = mapped_column(Float, nullable=True)
    functional_location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    licence_area: Mapped[str | None] = mapped_column(String(255), nullable=True)
    power_transformers: Mapped[str | None] = mapped_column(String(255), nullable=True)
    site_voltage: Mapped[str | None] = mapped_column(String(120), nullable=True)
    what3words: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type: Mapped[str | None] = mapped_column(String(120), nullable=True)
    voltage_transformer_ratings: Mapped[str | None] = mapped_column(String(255), nullable=True)
    connection_queue: Mapped[str | None] = mapped_column(String(255), nullable=True)
    uploaded_by: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        comment="Identity of the uploading user",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint(
            "risk_status IS NULL OR risk_status IN ('High', 'Low')",
            name="ck_gis_sites_risk_status",
        ),
        CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_gis_sites_latitude"),
        CheckConstraint("longitude BETWEEN -180 AND 180", name="ck_gis_sites_longitude"),
        Index("ix_gis_sites_site_name", "site_name"),
        Index("ix_gis_sites_uploaded_by", "uploaded_by"),
        Index("ix_gis_sites_risk_status", "risk_status"),
    )

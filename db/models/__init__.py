"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.gis_site import GisSite

__all__ = [
    "GisSite",
]

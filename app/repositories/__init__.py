"""
app/repositories package marker.
"""

from app.repositories.gis_site_repository import GisSiteRepository

__all__ = [
    "GisSiteRepository",
]

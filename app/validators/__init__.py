"""
app/validators package marker.
"""

from app.validators.site_validator import SiteRowValidator

__all__ = ["SiteRowValidator"]

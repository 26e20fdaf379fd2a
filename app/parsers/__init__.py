"""
app/parsers package marker.
"""

from app.parsers.site_csv_parser import CSV_CONTENT_TYPES, SiteCSVParser

__all__ = ["CSV_CONTENT_TYPES", "SiteCSVParser"]

"""
app/api/routers package marker.
"""

from app.api.routers.site_upload import router as site_upload_router

__all__ = [
    "site_upload_router",
]

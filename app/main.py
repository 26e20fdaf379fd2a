from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from app.config import get_logging_settings
from app.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def _check_site_store() -> None:
    """
    Fail startup unless the database answers and `gis_sites` exists.

    Migrations are never applied here.
    """
    from sqlalchemy import inspect as sa_inspect
    from sqlalchemy.exc import SQLAlchemyError

    from db.models import GisSite
    from db.session import get_engine

    table = GisSite.__tablename__
    try:
        present = sa_inspect(get_engine()).has_table(table)
    except SQLAlchemyError as exc:
        raise RuntimeError("Site store unavailable.") from exc

    if not present:
        logger.critical("Table %s is missing. Run 'alembic upgrade head' and restart.", table)
        raise RuntimeError(f"Site store is missing the {table} table. Run migrations.")


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    _check_site_store()
    logger.info("Site store reachable and migrated")
    yield


def create_app(*, check_database: bool = True) -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    configure_logging(get_logging_settings().level)

    application = FastAPI(
        title="GIS Site Upload API",
        version="1.0.0",
        lifespan=_lifespan if check_database else None,
    )

    from app.api.routers import site_upload_router

    application.include_router(site_upload_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()

"""
db/config.py

Environment access shared by the app settings and the site store.

Values come from the process environment, optionally seeded from `.env` and
`.env.local` at the project root. Seeding happens once per process and never
overrides variables that are already set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILENAMES = (".env", ".env.local")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = raw_line.strip().partition("=")
        if not sep or key.startswith("#"):
            continue
        key = key.strip()
        if key:
            pairs[key] = value.strip().strip("\"'")
    return pairs


@lru_cache(maxsize=1)
def load_env_files() -> None:
    for filename in ENV_FILENAMES:
        path = PROJECT_ROOT / filename
        if path.exists():
            for key, value in _parse_env_file(path).items():
                os.environ.setdefault(key, value)


def env_str(name: str, default: str) -> str:
    load_env_files()
    value = (os.getenv(name) or "").strip()
    return value or default


def env_int(name: str, default: int, *, minimum: int | None = None) -> int:
    """
    Integer setting; unparsable values fall back to the default and the
    result is clamped to ``minimum`` when given.
    """

    load_env_files()
    try:
        value = int(os.environ[name])
    except (KeyError, ValueError):
        value = default
    if minimum is not None:
        value = max(minimum, value)
    return value


def env_bool(name: str, default: bool) -> bool:
    load_env_files()
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def to_sqlalchemy_url(url: str) -> str:
    """
    Point bare postgres URLs at the psycopg driver.
    """

    scheme, sep, rest = url.partition("://")
    if sep and scheme in ("postgres", "postgresql"):
        return f"postgresql+psycopg://{rest}"
    return url


@dataclass(frozen=True)
class SiteStoreSettings:
    """
    Connection settings for the database holding `gis_sites`.
    """

    url: str
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle: int = 1800


def resolve_database_url() -> str:
    """
    SITE_STORE_DATABASE_URL wins over the generic DATABASE_URL. Only
    PostgreSQL is supported.
    """

    raw_url = env_str("SITE_STORE_DATABASE_URL", "") or env_str("DATABASE_URL", "")
    if not raw_url:
        raise RuntimeError(
            "No site store configured. Set SITE_STORE_DATABASE_URL or DATABASE_URL."
        )
    url = to_sqlalchemy_url(raw_url)
    if not url.startswith("postgresql"):
        raise RuntimeError("The site store requires a PostgreSQL URL.")
    return url


@lru_cache(maxsize=1)
def get_site_store_settings() -> SiteStoreSettings:
    return SiteStoreSettings(
        url=resolve_database_url(),
        echo=env_bool("SQL_ECHO", False),
        pool_size=env_int("DB_POOL_SIZE", 5, minimum=1),
        max_overflow=env_int("DB_MAX_OVERFLOW", 10, minimum=0),
        pool_recycle=env_int("DB_POOL_RECYCLE", 1800),
    )

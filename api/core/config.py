"""
Process configuration read from environment variables.

A `.env` file in the working directory is loaded first (python-dotenv), so
local development does not need exported variables. Values already present
in the environment win.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from dotenv import load_dotenv

load_dotenv()


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's sslmode in the query string.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    """
    DSN for the employee database.

    DATABASE_URL wins when set; otherwise the DSN is assembled from
    DB_HOST / DB_PORT / DB_USER / DB_PASSWORD / DB_NAME.
    """
    url = _env_str("DATABASE_URL")
    if url:
        return _sanitize_database_url(url)

    name = _env_str("DB_NAME")
    if not name:
        raise RuntimeError("Neither DATABASE_URL nor DB_NAME is set.")

    user = quote(_env_str("DB_USER"), safe="")
    password = quote(_env_str("DB_PASSWORD"), safe="")
    credentials = f"{user}:{password}@" if password else (f"{user}@" if user else "")
    host = _env_str("DB_HOST", "localhost")
    port = _env_int("DB_PORT", 5432)
    return f"postgresql://{credentials}{host}:{port}/{name}"


def cors_allow_origins() -> list[str]:
    raw = _env_str("CORS_ALLOW_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


@dataclass(frozen=True)
class PoolSettings:
    dsn: str
    min_size: int
    max_size: int
    command_timeout: int


def pool_settings() -> PoolSettings:
    return PoolSettings(
        dsn=database_url(),
        min_size=_env_int("DB_POOL_MIN_SIZE", 1),
        max_size=_env_int("DB_POOL_MAX_SIZE", 5),
        command_timeout=_env_int("DB_COMMAND_TIMEOUT", 30),
    )


def server_host() -> str:
    return _env_str("APP_HOST", "0.0.0.0")


def server_port() -> int:
    return _env_int("PORT", 8000)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()

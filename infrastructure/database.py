"""
Database connectivity - URL construction and a reachability probe
"""
import asyncio
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine

from core.logging_config import get_logger
from domain.common.exceptions import ConnectionCheckError
from domain.site_config import DatabaseConfig

logger = get_logger(__name__)

ASYNC_DRIVER = "mysql+aiomysql"


def _split_host(db_host: str) -> tuple[str, Optional[int], Optional[str]]:
    """Split DB_HOST into host, port and unix socket.

    Accepts ``host``, ``host:3306`` and ``host:/path/to/mysqld.sock``.
    """
    host, sep, rest = db_host.partition(":")
    if not sep:
        return db_host, None, None
    if rest.startswith("/"):
        return host or "localhost", None, rest
    if rest.isdigit():
        return host, int(rest), None
    return db_host, None, None


def build_database_url(config: DatabaseConfig, drivername: str = ASYNC_DRIVER) -> URL:
    """Build a SQLAlchemy URL from the published database constants."""
    host, port, socket_path = _split_host(config.host)
    query = {"charset": config.charset}
    if socket_path:
        query["unix_socket"] = socket_path
    return URL.create(
        drivername=drivername,
        username=config.user,
        password=config.password,
        host=host,
        port=port,
        database=config.name,
        query=query,
    )


async def ping_database(config: DatabaseConfig, timeout: Optional[float] = 5.0) -> bool:
    """
    Run ``SELECT 1`` against the configured database

    Raises:
        ConnectionCheckError: the database cannot be reached or rejected the credentials
    """
    url = build_database_url(config)
    engine = create_async_engine(url, pool_pre_ping=False)
    safe_url = url.render_as_string(hide_password=True)
    try:
        async def _probe() -> None:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

        await asyncio.wait_for(_probe(), timeout=timeout)
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
        logger.error("database_ping_failed", url=safe_url, error=str(exc))
        raise ConnectionCheckError("database", str(exc) or type(exc).__name__) from exc
    finally:
        await engine.dispose()
    logger.info("database_ping_ok", url=safe_url)
    return True

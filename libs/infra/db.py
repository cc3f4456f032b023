# libs/infra/db.py
from __future__ import annotations

import logging
from typing import Any, Dict

from sqlalchemy import text, event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

log = logging.getLogger(__name__)


def create_engine(database_url: str, *, schema: str | None = None, echo: bool = False) -> AsyncEngine:
    """
    Создаёт AsyncEngine. Для asyncpg схема выставляется через search_path,
    чтобы модели без явной схемы попадали в неё.
    """
    kwargs: Dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
    is_asyncpg = "+asyncpg" in database_url

    if is_asyncpg:
        kwargs["poolclass"] = NullPool  # при необходимости поменяйте на пул
        if schema:
            # asyncpg понимает server_settings → задаём search_path сразу.
            kwargs["connect_args"] = {"server_settings": {"search_path": f"{schema},public"}}

    engine = create_async_engine(database_url, **kwargs)

    if is_asyncpg and schema:
        # Страховка для случая, если server_settings не применились
        @event.listens_for(engine.sync_engine, "connect")
        def _set_search_path(dbapi_conn, _):  # type: ignore[no-untyped-def]
            try:
                cur = dbapi_conn.cursor()
                cur.execute(f'SET search_path TO "{schema}", public')
                cur.close()
            except Exception:  # не мешаем подключению, просто логируем
                log.debug("Could not set search_path on connect", exc_info=True)

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def check_db_connection(engine: AsyncEngine) -> bool:
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        log.exception("DB readiness check failed")
        return False


__all__ = [
    "create_engine",
    "create_session_factory",
    "check_db_connection",
]

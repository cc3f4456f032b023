# libs/app/bootstrap.py
from __future__ import annotations
from contextlib import asynccontextmanager
from typing import (
    Any,
    Awaitable,
    Callable,
    Optional,
    Type,
)
from fastapi import FastAPI
from pydantic_settings import BaseSettings

from .logging_middleware import LoggingMiddleware
from libs.utils.logging_setup import app_logger as log
from libs.app.health import create_health_router
from libs.infra.db import check_db_connection

ContainerFactory = Callable[..., Awaitable[Any]]


@asynccontextmanager
async def service_lifespan(app: FastAPI, *, container_factory: ContainerFactory):
    """
    Управляет жизненным циклом сервиса: создание и остановка DI-контейнера.
    """
    log.info("Запуск сервиса...")
    try:
        settings = getattr(app.state, "settings", None)
        container = (
            await container_factory(settings) if settings else await container_factory()
        )
        app.state.container = container
        log.info("DI-контейнер инициализирован.")
        log.success("Сервис готов к работе.")
        yield
    except Exception:
        log.exception("Критическая ошибка при старте сервиса.")
        raise
    finally:
        log.info("Остановка сервиса...")
        if hasattr(app.state, "container"):
            await app.state.container.shutdown()
        log.info("Сервис остановлен.")


def create_service_app(
    *,
    service_name: str,
    container_factory: ContainerFactory,
    settings_class: Optional[Type[BaseSettings]] = None,
    settings: Optional[BaseSettings] = None,
) -> FastAPI:
    """
    Фабрика для создания FastAPI-приложения сервиса.
    """

    def _lifespan(app):
        return service_lifespan(app, container_factory=container_factory)

    app = FastAPI(title=service_name, lifespan=_lifespan)

    if settings is not None:
        app.state.settings = settings
    elif settings_class:
        app.state.settings = settings_class()

    app.add_middleware(LoggingMiddleware)

    async def db_check():
        engine = getattr(app.state.container, "engine", None)
        if engine is None:
            return None
        return "database", await check_db_connection(engine)

    app.include_router(create_health_router([db_check]))

    log.info(f"Приложение '{service_name}' сконфигурировано.")
    return app

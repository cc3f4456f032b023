# libs/containers/account_container.py

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from libs.infra.db import create_engine, create_session_factory
from apps.account_svc.config.settings_account import AccountServiceSettings
from apps.account_svc.db.removal_hooks import RemovalHooks, default_removal_hooks
from apps.account_svc.services.account_status_manager import AccountStatusManager
from apps.account_svc.services.auth_service import AuthService
from apps.account_svc.utils.password_manager import PasswordManager


@dataclass
class AccountContainer:
    """DI-контейнер для сервиса аккаунтов."""

    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    status_manager: AccountStatusManager
    auth_service: AuthService
    removal_hooks: RemovalHooks = field(default_factory=RemovalHooks)

    @classmethod
    async def create(cls, settings: AccountServiceSettings) -> "AccountContainer":
        """Фабричный метод для асинхронной инициализации контейнера."""
        engine = create_engine(
            settings.DATABASE_URL,
            schema=settings.DB_SCHEMA,
            echo=settings.DB_ECHO,
        )
        return cls.from_engine(engine, settings)

    @classmethod
    def from_engine(cls, engine: AsyncEngine, settings: AccountServiceSettings) -> "AccountContainer":
        session_factory = create_session_factory(engine)
        removal_hooks = default_removal_hooks()

        password_manager = PasswordManager(
            rounds=settings.AUTH_PASSWORD_BCRYPT_ROUNDS,
            token_bytes=settings.CONFIRMATION_TOKEN_BYTES,
        )
        auth_service = AuthService(
            session_factory=session_factory,
            password_manager=password_manager,
            lock_max_attempts=settings.LOCK_MAX_ATTEMPTS,
            unlock_in=timedelta(seconds=settings.LOCK_UNLOCK_IN_SEC),
        )
        status_manager = AccountStatusManager(
            session_factory=session_factory,
            removal_hooks=removal_hooks,
        )

        return cls(
            engine=engine,
            session_factory=session_factory,
            status_manager=status_manager,
            auth_service=auth_service,
            removal_hooks=removal_hooks,
        )

    async def shutdown(self):
        await self.engine.dispose()

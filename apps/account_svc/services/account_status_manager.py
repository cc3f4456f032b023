# apps/account_svc/services/account_status_manager.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from libs.domain.orm.auth import Account, AccountStatus
from libs.utils.transactional_decorator import transactional
from ..db.account_repository import AccountRepository
from ..db.removal_hooks import RemovalHooks

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccountStatusManager:
    """
    Жизненный цикл статуса аккаунта.

    Любой статус достижим из любого другого напрямую, порядок переходов не проверяется.
    Каждый переход меняет статус и не более одной метки времени
    (reactivate сбрасывает все три). Метки других статусов не трогаются,
    поэтому у аккаунта может остаться, например, banned_at после suspend_user.

    Мутирующие методы возвращают True только если запись в БД закоммичена.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        removal_hooks: RemovalHooks | None = None,
        clock: Clock = utcnow,
    ):
        self.session_factory = session_factory
        self.removal_hooks = removal_hooks or RemovalHooks()
        self.clock = clock

    # --- Чтение ---

    async def get(self, account_id: int) -> Optional[Account]:
        async with self.session_factory() as session:
            return await AccountRepository(session).load(account_id)

    async def list_by_status(self, status: AccountStatus) -> List[Account]:
        """Все аккаунты в указанном статусе, по возрастанию id."""
        async with self.session_factory() as session:
            return await AccountRepository(session).list_by_status(status)

    # --- Переходы ---

    async def soft_delete(self, account_id: int) -> bool:
        """Помечает аккаунт удалённым, строка в БД остаётся."""
        return await self._update(account_id, status=AccountStatus.DELETED, deleted_at=self.clock())

    async def soft_destroy(self, account_id: int) -> bool:
        """Используется вместо разрушающего удаления, эквивалентно soft_delete."""
        return await self.soft_delete(account_id)

    async def ban_user(self, account_id: int) -> bool:
        return await self._update(account_id, status=AccountStatus.BANNED, banned_at=self.clock())

    async def suspend_user(self, account_id: int) -> bool:
        return await self._update(account_id, status=AccountStatus.SUSPENDED, suspended_at=self.clock())

    async def activate_user(self, account_id: int) -> bool:
        """Только статус, метки времени не меняются."""
        return await self._update(account_id, status=AccountStatus.ACTIVE)

    async def reactivate(self, account_id: int) -> bool:
        """Возвращает аккаунт в active и сбрасывает все статусные метки."""
        return await self._update(
            account_id,
            status=AccountStatus.ACTIVE,
            deleted_at=None,
            banned_at=None,
            suspended_at=None,
        )

    # --- Физическое удаление ---

    @transactional
    async def hard_delete(self, session: AsyncSession, account_id: int) -> None:
        """Удаляет строку без колбэков. Необратимо."""
        if await AccountRepository(session).remove(account_id):
            log.warning(f"Account {account_id} permanently deleted")

    @transactional
    async def hard_destroy(self, session: AsyncSession, account_id: int) -> None:
        """Удаляет строку, выполняя зарегистрированные колбэки удаления. Необратимо."""
        repo = AccountRepository(session, self.removal_hooks)
        if await repo.remove(account_id, run_hooks=True):
            log.warning(f"Account {account_id} permanently destroyed")

    async def _update(self, account_id: int, **changes: Any) -> bool:
        async with self.session_factory() as session:
            repo = AccountRepository(session)
            try:
                if not await repo.save(account_id, **changes):
                    log.warning(f"Account {account_id} not found, status change skipped")
                    return False
                await session.commit()
            except Exception as e:
                # Недоступная БД (asyncpg) поднимает OSError, а не SQLAlchemyError
                if session.in_transaction():
                    await session.rollback()
                log.exception(f"Failed to persist status change for account {account_id}: {e}")
                return False

        log.info(f"Account {account_id} status -> {changes['status'].value}")
        return True

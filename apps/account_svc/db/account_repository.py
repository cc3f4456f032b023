# apps/account_svc/db/account_repository.py
from __future__ import annotations

import logging
from typing import Any, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from libs.domain.orm.auth import Account, AccountStatus, Credentials
from .removal_hooks import RemovalHooks

log = logging.getLogger(__name__)


class AccountRepository:
    """
    Репозиторий аккаунтов поверх SQLAlchemy 2.0 ORM.
    Коммит выполняет сервисный слой, репозиторий только выполняет запросы.
    """

    def __init__(self, session: AsyncSession, hooks: RemovalHooks | None = None) -> None:
        self.session = session
        self.hooks = hooks or RemovalHooks()

    async def load(self, account_id: int) -> Optional[Account]:
        """Находит аккаунт по id вместе с credentials."""
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Находит аккаунт по email без учёта регистра."""
        stmt = select(Account).where(Account.email == email.lower())
        result = await self.session.execute(stmt)
        return result.unique().scalar_one_or_none()

    async def get_credentials_by_token(
        self, *, confirmation_token: str | None = None, unlock_token: str | None = None
    ) -> Optional[Credentials]:
        """Находит credentials по токену подтверждения или разблокировки."""
        stmt = select(Credentials)
        if confirmation_token is not None:
            stmt = stmt.where(Credentials.confirmation_token == confirmation_token)
        elif unlock_token is not None:
            stmt = stmt.where(Credentials.unlock_token == unlock_token)
        else:
            return None
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, account: Account) -> Account:
        """Добавляет аккаунт (и связанные credentials) в сессию."""
        self.session.add(account)
        await self.session.flush()  # Получаем ID и default-значения
        return account

    async def save(self, account_id: int, **fields: Any) -> bool:
        """
        Атомарно обновляет перечисленные поля одним UPDATE.
        Возвращает False, если строки с таким id нет.
        """
        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .values(**fields)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def list_by_status(self, status: AccountStatus) -> List[Account]:
        stmt = select(Account).where(Account.status == status).order_by(Account.id)
        result = await self.session.execute(stmt)
        return list(result.unique().scalars().all())

    async def remove(self, account_id: int, *, run_hooks: bool = False) -> bool:
        """
        Физически удаляет строку аккаунта.
        С run_hooks=True вокруг DELETE выполняются зарегистрированные колбэки.
        Отсутствие аккаунта не ошибка: возвращается False.
        """
        account: Account | None = None
        if run_hooks:
            account = await self.load(account_id)
            if account is None:
                return False
            await self.hooks.run_before(account, self.session)

        stmt = (
            delete(Account)
            .where(Account.id == account_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        removed = result.rowcount > 0

        if account is not None:
            # Объект больше не соответствует строке в БД
            self.session.expunge(account)
            await self.hooks.run_after(account, self.session)

        return removed

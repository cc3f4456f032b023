# apps/account_svc/db/removal_hooks.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from libs.domain.orm.auth import Account, Credentials

log = logging.getLogger(__name__)

RemovalHook = Callable[[Account, AsyncSession], Awaitable[None]]


@dataclass
class RemovalHooks:
    """
    Упорядоченный реестр колбэков, которые выполняются вокруг
    физического удаления аккаунта (hard_destroy).

    Колбэки получают удаляемый аккаунт и текущую сессию, поэтому
    каскадная очистка идёт в той же транзакции, что и DELETE.
    Исключение из колбэка прерывает удаление.
    """

    before: List[RemovalHook] = field(default_factory=list)
    after: List[RemovalHook] = field(default_factory=list)

    def before_remove(self, hook: RemovalHook) -> RemovalHook:
        self.before.append(hook)
        return hook

    def after_remove(self, hook: RemovalHook) -> RemovalHook:
        self.after.append(hook)
        return hook

    async def run_before(self, account: Account, session: AsyncSession) -> None:
        await self._run(self.before, account, session)

    async def run_after(self, account: Account, session: AsyncSession) -> None:
        await self._run(self.after, account, session)

    @staticmethod
    async def _run(hooks: List[RemovalHook], account: Account, session: AsyncSession) -> None:
        for hook in hooks:
            log.debug(f"Running removal hook {getattr(hook, '__name__', repr(hook))} for account {account.id}")
            await hook(account, session)


async def purge_credentials(account: Account, session: AsyncSession) -> None:
    """Удаляет credentials аккаунта до удаления самой строки."""
    await session.execute(delete(Credentials).where(Credentials.account_id == account.id))


def default_removal_hooks() -> RemovalHooks:
    hooks = RemovalHooks()
    hooks.before_remove(purge_credentials)
    return hooks

# tests/conftest.py
import itertools
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from libs.domain.orm.auth import Account, AccountStatus
from libs.domain.orm.base import Base
from libs.infra.db import create_session_factory
from apps.account_svc.db.removal_hooks import RemovalHooks
from apps.account_svc.services.account_status_manager import AccountStatusManager
from apps.account_svc.services.auth_service import AuthService
from apps.account_svc.utils.password_manager import PasswordManager
from tests.helpers import FakeClock


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session")
def user_data():
    u = uuid.uuid4().hex[:10]
    return {
        "email": f"{u}@example.com",
        "user_name": f"test_{u}",
        "password": "Password123!",
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # SQLite по умолчанию не проверяет внешние ключи, ON DELETE CASCADE нужен для hard_delete
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_conn, _):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def removal_hooks() -> RemovalHooks:
    return RemovalHooks()


@pytest.fixture
def status_manager(session_factory, removal_hooks, clock) -> AccountStatusManager:
    return AccountStatusManager(session_factory, removal_hooks=removal_hooks, clock=clock)


@pytest.fixture
def auth_service(session_factory, clock) -> AuthService:
    return AuthService(
        session_factory,
        PasswordManager(rounds=4),
        lock_max_attempts=3,
        unlock_in=timedelta(hours=1),
        clock=clock,
    )


@pytest.fixture
def make_account(session_factory):
    """Создаёт аккаунт в БД и возвращает его id."""
    counter = itertools.count(1)

    async def _make(status: AccountStatus | None = AccountStatus.ACTIVE, **fields) -> int:
        n = next(counter)
        kwargs = {"email": f"user{n}_{uuid.uuid4().hex[:6]}@example.com", "user_name": f"User {n}"}
        if status is not None:
            kwargs["status"] = status
        kwargs.update(fields)
        async with session_factory() as session:
            account = Account(**kwargs)
            session.add(account)
            await session.commit()
            return account.id

    return _make

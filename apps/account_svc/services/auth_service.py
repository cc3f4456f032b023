# apps/account_svc/services/auth_service.py
from __future__ import annotations
from datetime import datetime, timedelta
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from libs.app.errors import ErrorCode
from libs.domain.dto.auth import LoginRequest, RegisterRequest
from libs.domain.orm.auth import Account, Credentials
from ..db.account_repository import AccountRepository
from ..utils.password_manager import PasswordManager
from .account_status_manager import Clock, utcnow

log = logging.getLogger(__name__)


class AuthService:
    """
    Сервисный слой аутентификации: пароли, подтверждение email,
    блокировка после неудачных попыток и трекинг входов.

    Статус аккаунта здесь не учитывается: забаненный или удалённый
    аккаунт с верным паролем проходит аутентификацию, решение о доступе
    принимает вызывающий код.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        password_manager: PasswordManager,
        lock_max_attempts: int = 3,
        unlock_in: timedelta = timedelta(hours=1),
        clock: Clock = utcnow,
    ):
        self.session_factory = session_factory
        self.password_manager = password_manager
        self.lock_max_attempts = lock_max_attempts
        self.unlock_in = unlock_in
        self.clock = clock

    async def register(self, dto: RegisterRequest) -> tuple[Account | None, ErrorCode | None]:
        """Создаёт неактивный аккаунт с credentials и токеном подтверждения."""
        async with self.session_factory() as session:
            repo = AccountRepository(session)
            try:
                if await repo.get_by_email(dto.email):
                    return None, ErrorCode.AUTH_USER_EXISTS

                now = self.clock()
                new_account = Account(
                    email=dto.email.lower(),
                    user_name=dto.user_name,
                    credentials=Credentials(
                        password_hash=self.password_manager.hash_password(dto.password),
                        password_updated_at=now,
                        confirmation_token=self.password_manager.generate_token(),
                        confirmation_sent_at=now,
                        failed_attempts=0,
                        sign_in_count=0,
                    ),
                )
                await repo.add(new_account)
                await session.commit()

                log.info(f"Account {new_account.id} registered")
                return new_account, None
            except IntegrityError:
                # Гонка двух регистраций с одним email
                await session.rollback()
                log.warning("Duplicate email on registration.")
                return None, ErrorCode.AUTH_USER_EXISTS
            except Exception as e:
                if session.in_transaction():
                    await session.rollback()
                log.exception(f"Unexpected error during registration: {e}")
                return None, ErrorCode.INTERNAL_ERROR

    async def issue_confirmation_token(self, account_id: int) -> tuple[str | None, ErrorCode | None]:
        """Выпускает новый токен подтверждения email. Доставка токена не входит в сервис."""
        async with self.session_factory() as session:
            account = await AccountRepository(session).load(account_id)
            if account is None or account.credentials is None:
                return None, ErrorCode.ACCOUNT_NOT_FOUND

            token = self.password_manager.generate_token()
            account.credentials.confirmation_token = token
            account.credentials.confirmation_sent_at = self.clock()
            await session.commit()
            return token, None

    async def confirm(self, token: str) -> ErrorCode | None:
        """Подтверждает email по токену. Токен одноразовый."""
        async with self.session_factory() as session:
            creds = await AccountRepository(session).get_credentials_by_token(confirmation_token=token)
            if creds is None:
                return ErrorCode.AUTH_TOKEN_INVALID

            creds.confirmed_at = self.clock()
            creds.confirmation_token = None
            await session.commit()
            log.info(f"Account {creds.account_id} confirmed")
            return None

    async def authenticate(self, dto: LoginRequest) -> bool:
        """Проверка учётных данных с побочными эффектами блокировки и трекинга."""
        _account, error = await self.sign_in(dto)
        return error is None

    async def sign_in(self, dto: LoginRequest) -> tuple[Account | None, ErrorCode | None]:
        """То же, что authenticate, но с причиной отказа."""
        async with self.session_factory() as session:
            account = await AccountRepository(session).get_by_email(dto.email)
            if account is None or account.credentials is None:
                return None, ErrorCode.AUTH_INVALID_CREDENTIALS

            creds = account.credentials
            now = self.clock()

            if creds.is_locked(self.unlock_in, now):
                log.warning(f"Sign in rejected for locked account {account.id}")
                return None, ErrorCode.AUTH_ACCOUNT_LOCKED
            if creds.locked_at is not None:
                # Срок блокировки истёк
                self._clear_lock(creds)

            if not self.password_manager.verify_password(dto.password, creds.password_hash):
                locked = self._register_failed_attempt(creds, self.lock_max_attempts, now)
                await session.commit()
                if locked:
                    log.warning(f"Account {account.id} locked after {creds.failed_attempts} failed attempts")
                    return None, ErrorCode.AUTH_ACCOUNT_LOCKED
                return None, ErrorCode.AUTH_INVALID_CREDENTIALS

            if not creds.is_confirmed:
                return None, ErrorCode.AUTH_UNCONFIRMED

            creds.failed_attempts = 0
            self._track_login(creds, dto.ip, now)
            await session.commit()
            return account, None

    async def record_login(self, account_id: int, ip: str | None, at: Optional[datetime] = None) -> bool:
        """Сдвигает текущий вход в последний и фиксирует новый."""
        async with self.session_factory() as session:
            account = await AccountRepository(session).load(account_id)
            if account is None or account.credentials is None:
                return False
            self._track_login(account.credentials, ip, at or self.clock())
            await session.commit()
            return True

    async def lock_after_failed_attempts(self, account_id: int, max_attempts: int | None = None) -> bool:
        """
        Учитывает неудачную попытку входа.
        Возвращает True, если после неё аккаунт заблокирован.
        """
        async with self.session_factory() as session:
            account = await AccountRepository(session).load(account_id)
            if account is None or account.credentials is None:
                return False
            locked = self._register_failed_attempt(
                account.credentials,
                max_attempts if max_attempts is not None else self.lock_max_attempts,
                self.clock(),
            )
            await session.commit()
            return locked

    async def unlock(self, token: str) -> ErrorCode | None:
        async with self.session_factory() as session:
            creds = await AccountRepository(session).get_credentials_by_token(unlock_token=token)
            if creds is None:
                return ErrorCode.AUTH_TOKEN_INVALID
            self._clear_lock(creds)
            await session.commit()
            log.info(f"Account {creds.account_id} unlocked")
            return None

    def _register_failed_attempt(self, creds: Credentials, max_attempts: int, now: datetime) -> bool:
        creds.failed_attempts = (creds.failed_attempts or 0) + 1
        if creds.failed_attempts >= max_attempts and creds.locked_at is None:
            creds.locked_at = now
            creds.unlock_token = self.password_manager.generate_token()
        return creds.locked_at is not None

    @staticmethod
    def _clear_lock(creds: Credentials) -> None:
        creds.failed_attempts = 0
        creds.locked_at = None
        creds.unlock_token = None

    @staticmethod
    def _track_login(creds: Credentials, ip: str | None, at: datetime) -> None:
        creds.last_sign_in_at = creds.current_sign_in_at or at
        creds.last_sign_in_ip = creds.current_sign_in_ip or ip
        creds.current_sign_in_at = at
        creds.current_sign_in_ip = ip
        creds.sign_in_count = (creds.sign_in_count or 0) + 1

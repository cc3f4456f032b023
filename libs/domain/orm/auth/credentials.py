# libs/domain/orm/auth/credentials.py
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from libs.domain.orm.base import Base

if TYPE_CHECKING:
    from .account import Account


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    # SQLite возвращает naive datetime даже для DateTime(timezone=True)
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class Credentials(Base):
    """
    Учётные данные аккаунта: пароль, подтверждение email,
    блокировка после неудачных попыток и трекинг входов.
    Статусная модель аккаунта эти поля не читает и не меняет.
    """

    __tablename__ = "credentials"

    account_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
    )

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    password_updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    # Подтверждение email
    confirmation_token: Mapped[str | None] = mapped_column(String(128), unique=True)
    confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    confirmation_sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    unconfirmed_email: Mapped[str | None] = mapped_column(String(255))

    # Блокировка
    failed_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    unlock_token: Mapped[str | None] = mapped_column(String(128), unique=True)
    locked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Трекинг входов
    sign_in_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_sign_in_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    last_sign_in_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    current_sign_in_ip: Mapped[str | None] = mapped_column(String(45))
    last_sign_in_ip: Mapped[str | None] = mapped_column(String(45))

    # Связи
    account: Mapped["Account"] = relationship(
        back_populates="credentials", uselist=False
    )

    @property
    def is_confirmed(self) -> bool:
        return self.confirmed_at is not None

    def is_locked(self, unlock_in: timedelta, now: datetime | None = None) -> bool:
        """Блокировка снимается сама по истечении unlock_in."""
        if self.locked_at is None:
            return False
        now = now or _utcnow()
        return _as_aware(self.locked_at) + unlock_in > now

# libs/domain/orm/auth/account.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Integer, String, Enum, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from libs.domain.orm.base import Base
from .enums import AccountStatus


if TYPE_CHECKING:
    from .credentials import Credentials


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True
    )
    # email храним в нижнем регистре: уникальность без учёта регистра
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    user_name: Mapped[str | None] = mapped_column(String(100))

    status: Mapped[AccountStatus] = mapped_column(
        Enum(
            AccountStatus,
            name="account_status_enum",
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        nullable=False,
        default=AccountStatus.INACTIVE,
        index=True,
    )

    # Метки входа в соответствующий статус. Сбрасываются только через reactivate.
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    banned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    suspended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Связи
    credentials: Mapped["Credentials | None"] = relationship(
        back_populates="account", uselist=False, lazy="joined"
    )

    def __init__(self, **kwargs) -> None:
        # Column default срабатывает только при INSERT, а статус нужен сразу
        kwargs.setdefault("status", AccountStatus.INACTIVE)
        super().__init__(**kwargs)

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    @property
    def is_banned(self) -> bool:
        return self.status == AccountStatus.BANNED

    @property
    def is_deleted(self) -> bool:
        return self.status == AccountStatus.DELETED

    @property
    def is_suspended(self) -> bool:
        return self.status == AccountStatus.SUSPENDED

    @property
    def is_inactive(self) -> bool:
        return self.status == AccountStatus.INACTIVE

    def __repr__(self) -> str:
        return f"<Account id={self.id} email={self.email!r} status={self.status.value if self.status else None}>"

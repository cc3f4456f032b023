# libs/domain/orm/auth/enums.py
import enum


class AccountStatus(str, enum.Enum):
    """Статус аккаунта. Любой статус достижим из любого другого."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    BANNED = "banned"
    DELETED = "deleted"
    SUSPENDED = "suspended"

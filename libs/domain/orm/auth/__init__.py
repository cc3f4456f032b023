# libs/domain/orm/auth/__init__.py
from .account import Account
from .credentials import Credentials
from .enums import AccountStatus

__all__ = [
    "Account",
    "Credentials",
    "AccountStatus",
]
